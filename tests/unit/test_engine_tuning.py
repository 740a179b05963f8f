"""
Тесты для Engine Tuning

Проверяет:
- Значения по умолчанию
- Валидацию границ (Pydantic Field)
- Immutability (frozen=True)
- Переопределение через use_tuning() и восстановление после выхода
- Изоляцию настройки между потоками (ContextVar)
"""

import threading

import pytest
from pydantic import ValidationError

from src.bigint import BigInteger
from src.bigint.config import (
    DEFAULT_TUNING,
    GCD_BINARY_WORD_LIMIT_DEFAULT,
    NEAR_EQUAL_EXTRA_WORDS_DEFAULT,
    RECURSION_LIMIT_DEFAULT,
    EngineTuning,
    current_tuning,
    use_tuning,
)


# =============================================================================
# ТЕСТЫ: МОДЕЛЬ
# =============================================================================


class TestEngineTuningModel:
    """Тесты модели EngineTuning."""

    def test_defaults(self) -> None:
        """Значения по умолчанию."""
        tuning = EngineTuning()
        assert tuning.recursion_limit == RECURSION_LIMIT_DEFAULT == 10
        assert tuning.gcd_binary_word_limit == GCD_BINARY_WORD_LIMIT_DEFAULT
        assert tuning.near_equal_extra_words == NEAR_EQUAL_EXTRA_WORDS_DEFAULT
        assert DEFAULT_TUNING == tuning

    def test_recursion_limit_lower_bound(self) -> None:
        """recursion_limit < 4 отклоняется."""
        with pytest.raises(ValidationError, match="greater than or equal to 4"):
            EngineTuning(recursion_limit=3)
        assert EngineTuning(recursion_limit=4).recursion_limit == 4

    def test_recursion_limit_upper_bound(self) -> None:
        """recursion_limit > 256 отклоняется."""
        with pytest.raises(ValidationError, match="less than or equal to 256"):
            EngineTuning(recursion_limit=257)

    def test_negative_limits_rejected(self) -> None:
        """Отрицательные пороги отклоняются."""
        with pytest.raises(ValidationError):
            EngineTuning(gcd_binary_word_limit=-1)
        with pytest.raises(ValidationError):
            EngineTuning(near_equal_extra_words=-1)

    def test_frozen(self) -> None:
        """Модель неизменяема."""
        tuning = EngineTuning()
        with pytest.raises(ValidationError, match="frozen"):
            tuning.recursion_limit = 20


# =============================================================================
# ТЕСТЫ: АКТИВНАЯ НАСТРОЙКА
# =============================================================================


class TestUseTuning:
    """Тесты use_tuning() и current_tuning()."""

    def test_default_is_active(self) -> None:
        """Вне use_tuning действует настройка по умолчанию."""
        assert current_tuning() is DEFAULT_TUNING

    def test_override_and_restore(self) -> None:
        """Настройка действует только внутри блока."""
        custom = EngineTuning(recursion_limit=4, near_equal_extra_words=0)
        with use_tuning(custom) as active:
            assert active is custom
            assert current_tuning() is custom
        assert current_tuning() is DEFAULT_TUNING

    def test_nested_overrides(self) -> None:
        """Вложенные блоки восстанавливают внешнюю настройку."""
        outer = EngineTuning(recursion_limit=8)
        inner = EngineTuning(recursion_limit=4)
        with use_tuning(outer):
            with use_tuning(inner):
                assert current_tuning() is inner
            assert current_tuning() is outer

    def test_restored_after_exception(self) -> None:
        """Исключение внутри блока не оставляет настройку активной."""
        with pytest.raises(RuntimeError):
            with use_tuning(EngineTuning(recursion_limit=4)):
                raise RuntimeError("boom")
        assert current_tuning() is DEFAULT_TUNING

    def test_other_thread_sees_default(self) -> None:
        """Переопределение не видно в другом потоке."""
        seen = []
        with use_tuning(EngineTuning(recursion_limit=4)):
            worker = threading.Thread(
                target=lambda: seen.append(current_tuning().recursion_limit)
            )
            worker.start()
            worker.join()
        assert seen == [RECURSION_LIMIT_DEFAULT]

    def test_results_independent_of_tuning(self) -> None:
        """Настройка меняет путь вычисления, но не результат."""
        a = BigInteger.from_string("9" * 400)
        b = BigInteger.from_string("7" * 333)
        expected = str(int("9" * 400) * int("7" * 333))
        for tuning in (
            EngineTuning(recursion_limit=4),
            EngineTuning(recursion_limit=256),
            EngineTuning(recursion_limit=6, near_equal_extra_words=40),
        ):
            with use_tuning(tuning):
                assert str(a * b) == expected
