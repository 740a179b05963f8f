"""
Addition Engine — сложение и вычитание модулей

Знаковое сложение сводится к сложению или вычитанию модулей; вычитание
всегда идёт из большего модуля, знак результата возвращается отдельно.
"""

from src.bigint.words.buffer import allocate, count_words
from src.bigint.words.kernels import (
    add_uneven_size,
    compare,
    decrement,
    subtract,
)


def add_magnitudes(
    words1: list[int], count1: int,
    words2: list[int], count2: int,
) -> list[int]:
    """Сумма модулей: новый буфер из max(count1, count2) + 1 слов."""
    if count1 < count2:
        words1, count1, words2, count2 = words2, count2, words1, count1
    result = allocate(count1 + 1)
    result[count1] = add_uneven_size(result, 0, words1, 0, count1, words2, 0, count2)
    return result


def compare_magnitudes(
    words1: list[int], count1: int,
    words2: list[int], count2: int,
) -> int:
    """Сравнение модулей в канонической форме: -1, 0 или 1."""
    if count1 != count2:
        return 1 if count1 > count2 else -1
    return compare(words1, 0, words2, 0, count1)


def subtract_magnitudes(
    words1: list[int], count1: int,
    words2: list[int], count2: int,
) -> tuple[bool, list[int], int]:
    """
    Разность модулей |words1| - |words2|.

    Returns:
        (negative, words, count): negative истинно, если |words2| > |words1|
    """
    order = compare_magnitudes(words1, count1, words2, count2)
    if order == 0:
        return False, allocate(1), 0
    negative = order < 0
    if negative:
        words1, count1, words2, count2 = words2, count2, words1, count1
    result = allocate(count1)
    borrow = subtract(result, 0, words1, 0, words2, 0, count2)
    result[count2:count1] = words1[count2:count1]
    if borrow:
        decrement(result, count2, count1 - count2, 1)
    return negative, result, count_words(result, count1)
