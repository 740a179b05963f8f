"""
Engine Tuning — пороги выбора алгоритмов

Пороги, по которым движок выбирает вариант алгоритма по числу слов
операндов. Модель неизменяема; активная настройка хранится в ContextVar,
поэтому переопределение через use_tuning() видно только текущему
контексту (потоку или задаче).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Final, Iterator

from pydantic import BaseModel, Field

# =============================================================================
# ЗНАЧЕНИЯ ПО УМОЛЧАНИЮ
# =============================================================================

# Число слов, до которого умножение идёт через schoolbook/unrolled ядра
RECURSION_LIMIT_DEFAULT: Final[int] = 10

# Число слов, до которого gcd использует шаг вычитания со сдвигом
GCD_BINARY_WORD_LIMIT_DEFAULT: Final[int] = 10

# Разница длин операндов, при которой они считаются почти равными
NEAR_EQUAL_EXTRA_WORDS_DEFAULT: Final[int] = 2


class EngineTuning(BaseModel):
    """
    Настройка порогов движка.

    recursion_limit не может быть меньше 4: рекурсивное разбиение
    операнда нечётной длины должно оставлять обе половины непустыми.
    """

    recursion_limit: int = Field(
        default=RECURSION_LIMIT_DEFAULT,
        ge=4,
        le=256,
        description="Max word count handled by schoolbook/unrolled kernels",
    )
    gcd_binary_word_limit: int = Field(
        default=GCD_BINARY_WORD_LIMIT_DEFAULT,
        ge=0,
        description="Max word count for subtract-and-shift gcd steps",
    )
    near_equal_extra_words: int = Field(
        default=NEAR_EQUAL_EXTRA_WORDS_DEFAULT,
        ge=0,
        description="Size difference treated as near-equal in asymmetric multiply",
    )

    model_config = {"frozen": True}


DEFAULT_TUNING: Final[EngineTuning] = EngineTuning()

_active_tuning: ContextVar[EngineTuning] = ContextVar(
    "bigint_engine_tuning", default=DEFAULT_TUNING
)


def current_tuning() -> EngineTuning:
    """Активная настройка текущего контекста."""
    return _active_tuning.get()


@contextmanager
def use_tuning(tuning: EngineTuning) -> Iterator[EngineTuning]:
    """
    Временно заменить настройку в текущем контексте.

    Examples:
        >>> with use_tuning(EngineTuning(recursion_limit=4)):
        ...     current_tuning().recursion_limit
        4
    """
    token = _active_tuning.set(tuning)
    try:
        yield tuning
    finally:
        _active_tuning.reset(token)
