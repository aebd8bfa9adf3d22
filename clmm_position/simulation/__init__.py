from .replay import replay_updates, UPDATE_COLUMNS, HISTORY_COLUMNS
