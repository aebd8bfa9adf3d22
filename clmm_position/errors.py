"""
포지션 원장 오류 정의

모든 오류는 실패한 단계에서 즉시 발생하며 호출자에게 그대로 전달됩니다.
오류 발생 시 포지션 레코드는 호출 전 상태 그대로 남습니다.
"""


class PositionError(Exception):
    """포지션 원장 오류 (기본 클래스)"""
    code = "PE"

    def __init__(self, message: str = None):
        super().__init__(message or self.__doc__)


class NoLiquidityError(PositionError):
    """유동성이 0인 포지션에 대한 poke는 허용되지 않습니다"""
    code = "NP"


class LiquidityMathError(PositionError, ArithmeticError):
    """유동성 delta 적용 오류"""
    code = "LM"


class LiquiditySubError(LiquidityMathError):
    """유동성 감소 결과가 음수입니다"""
    code = "LS"


class LiquidityAddError(LiquidityMathError):
    """유동성 증가 결과가 u64 범위를 초과합니다"""
    code = "LA"


class FixedPointConversionError(PositionError, OverflowError):
    """mul-div 결과가 u64 범위를 초과합니다"""
    code = "FC"
