"""
Arbitrary-precision signed integer engine

Неизменяемый тип BigInteger и ядра, на которых он построен: операции над
отрезками слов, умножение (schoolbook, развёрнутые ядра, Karatsuba),
длинное деление, десятичные и байтовые преобразования.
"""

# Public Value API
from src.bigint.big_integer import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    BigInteger,
    DivRem,
    SqrtRem,
)

# Configuration
from src.bigint.config import (
    DEFAULT_TUNING,
    EngineTuning,
    current_tuning,
    use_tuning,
)

# Errors
from src.bigint.errors import (
    BigIntegerError,
    DivisionByZeroError,
    DivisionInvariantError,
    IntegerOverflowError,
    InvalidArgumentError,
)

__all__ = [
    # Public Value API
    "BigInteger",
    "DivRem",
    "SqrtRem",
    "INT32_MAX",
    "INT32_MIN",
    "INT64_MAX",
    "INT64_MIN",
    # Configuration
    "DEFAULT_TUNING",
    "EngineTuning",
    "current_tuning",
    "use_tuning",
    # Errors
    "BigIntegerError",
    "DivisionByZeroError",
    "DivisionInvariantError",
    "IntegerOverflowError",
    "InvalidArgumentError",
]
