"""
Word Buffer — хранилище модуля числа

Модуль числа хранится как список 16-битных беззнаковых слов, младшее
слово первым. Число значащих слов (count) хранится отдельно: слова с
индексом >= count логически равны нулю и служат запасом ёмкости.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждое слово лежит в [0, WORD_MASK]
2. В канонической форме слово count - 1 ненулевое, либо count == 0
3. Ядра не расширяют буферы; размер обеспечивает вызывающий код
"""

from typing import Final

from src.bigint.errors import InvalidArgumentError

# =============================================================================
# ПАРАМЕТРЫ СЛОВА
# =============================================================================

WORD_BITS: Final[int] = 16
WORD_MASK: Final[int] = 0xFFFF

# Старший бит слова (бит знака в дополнительном коде)
WORD_HIGH_BIT: Final[int] = 0x8000


# =============================================================================
# РАЗМЕРЫ И РОСТ
# =============================================================================


def allocate(size: int) -> list[int]:
    """Новый буфер из size нулевых слов."""
    return [0] * size


def roundup_size(count: int) -> int:
    """Округление числа слов вверх до чётного."""
    return count + (count & 1)


def bits_to_words(bits: int) -> int:
    """Число слов, достаточное для хранения bits бит."""
    return (bits + WORD_BITS - 1) >> 4


def count_words(words: list[int], count: int) -> int:
    """
    Число значащих слов в words[0:count].

    Examples:
        >>> count_words([1, 2, 0, 0], 4)
        2
        >>> count_words([0, 0], 2)
        0
    """
    while count and words[count - 1] == 0:
        count -= 1
    return count


def clean_grow(words: list[int], size: int) -> list[int]:
    """Буфер ёмкостью не меньше size; новые слова нулевые."""
    if size > len(words):
        return words + allocate(size - len(words))
    return words


def grow_for_carry(words: list[int], carry: int) -> list[int]:
    """Дописать слово переноса сразу за текущей ёмкостью буфера."""
    old_size = len(words)
    grown = clean_grow(words, roundup_size(old_size + 1))
    grown[old_size] = carry
    return grown


def copy_words(
    source: list[int], source_start: int,
    dest: list[int], dest_start: int,
    count: int,
) -> None:
    """Копирование count слов из source в dest."""
    dest[dest_start:dest_start + count] = source[source_start:source_start + count]


def clear_words(words: list[int], start: int, count: int) -> None:
    """Обнуление words[start:start + count]."""
    if count > 0:
        words[start:start + count] = allocate(count)


# =============================================================================
# БИТОВЫЕ ЗАПРОСЫ
# =============================================================================


def unsigned_bit_length(words: list[int], count: int) -> int:
    """
    Битовая длина модуля, записанного в words[0:count].

    Examples:
        >>> unsigned_bit_length([0, 1], 2)
        17
        >>> unsigned_bit_length([], 0)
        0
    """
    count = count_words(words, count)
    if count == 0:
        return 0
    return (count - 1) * WORD_BITS + words[count - 1].bit_length()


def make_uint(low: int, high: int) -> int:
    """Двойное слово из двух 16-битных половин."""
    return (low & WORD_MASK) | ((high & WORD_MASK) << WORD_BITS)


def native_value(words: list[int], count: int) -> int:
    """Модуль из не более чем четырёх слов как нативное 64-битное целое."""
    value = 0
    for i in range(count - 1, -1, -1):
        value = (value << WORD_BITS) | words[i]
    return value


def words_from_native(value: int, size: int = 4) -> list[int]:
    """Разложение неотрицательного 64-битного целого на слова."""
    words = allocate(size)
    i = 0
    while value:
        words[i] = value & WORD_MASK
        value >>= WORD_BITS
        i += 1
    return words


# =============================================================================
# ПРОВЕРКА ГРАНИЦ
# =============================================================================


def require_extent(words: list[int], start: int, count: int, name: str) -> None:
    """
    Проверка, что words[start:start + count] лежит внутри буфера.

    Ядра границы не проверяют; проверку выполняет вызывающий уровень.

    Raises:
        InvalidArgumentError: если диапазон выходит за пределы буфера
    """
    if start < 0 or count < 0 or start + count > len(words):
        raise InvalidArgumentError(
            f"{name}: extent [{start}, {start + count}) exceeds buffer "
            f"of {len(words)} words"
        )
