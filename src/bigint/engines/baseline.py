"""
Baseline Multiplication — ядра без рекурсии

Schoolbook O(n*m), развёрнутые ядра для 2/4/8 слов, линейное умножение
на одно слово и умножение на двухсловный множитель.

Развёрнутые ядра считают произведение по столбцам: столбец k собирает
все a_i * b_j с i + j == k в один накопитель, младшие 16 бит уходят в
результат, остаток переносится в следующий столбец.

Все функции записывают результат заново (не накапливают), кроме
linear_multiply_add. Результат не должен перекрываться с операндами.
"""

from src.bigint.words.buffer import WORD_BITS, WORD_MASK, clear_words
from src.bigint.words.kernels import shift_left_by_bits


# =============================================================================
# ЛИНЕЙНОЕ УМНОЖЕНИЕ
# =============================================================================


def linear_multiply(
    product: list[int], cstart: int,
    words1: list[int], astart: int,
    word: int, n: int,
) -> int:
    """
    product = words1 * word по n словам.

    Returns:
        старшее слово произведения (перенос)
    """
    carry = 0
    for i in range(n):
        p = words1[astart + i] * word + carry
        product[cstart + i] = p & WORD_MASK
        carry = p >> WORD_BITS
    return carry


def linear_multiply_add(
    product: list[int], cstart: int,
    words1: list[int], astart: int,
    word: int, n: int,
) -> int:
    """product += words1 * word по n словам; возвращает перенос."""
    carry = 0
    for i in range(n):
        p = words1[astart + i] * word + carry + product[cstart + i]
        product[cstart + i] = p & WORD_MASK
        carry = p >> WORD_BITS
    return carry


def multiply_by_two_words(
    result: list[int], rstart: int,
    low: int, high: int,
    words2: list[int], bstart: int, bcount: int,
) -> None:
    """
    result[0:bcount + 2] = (high:low) * words2 при чётном bcount.

    Множитель и множимое обрабатываются по два слова за шаг.
    """
    multiplier = low | (high << WORD_BITS)
    carry = 0
    for i in range(0, bcount, 2):
        pair = words2[bstart + i] | (words2[bstart + i + 1] << WORD_BITS)
        p = multiplier * pair + carry
        result[rstart + i] = p & WORD_MASK
        result[rstart + i + 1] = (p >> WORD_BITS) & WORD_MASK
        carry = p >> 32
    result[rstart + bcount] = carry & WORD_MASK
    result[rstart + bcount + 1] = carry >> WORD_BITS


# =============================================================================
# SCHOOLBOOK
# =============================================================================


def schoolbook_multiply(
    result: list[int], rstart: int,
    words1: list[int], astart: int, acount: int,
    words2: list[int], bstart: int, bcount: int,
) -> None:
    """result[0:acount + bcount] = words1 * words2 построчно."""
    if acount == 0 or bcount == 0:
        clear_words(result, rstart, acount + bcount)
        return
    # Внешний цикл по короткому операнду
    if acount > bcount:
        words1, astart, acount, words2, bstart, bcount = (
            words2, bstart, bcount, words1, astart, acount
        )
    for i in range(acount):
        cstart = rstart + i
        word = words1[astart + i]
        if i == 0:
            carry = linear_multiply(result, cstart, words2, bstart, word, bcount)
        else:
            carry = linear_multiply_add(result, cstart, words2, bstart, word, bcount)
        result[cstart + bcount] = carry


def schoolbook_square(
    result: list[int], rstart: int,
    words1: list[int], astart: int, n: int,
) -> None:
    """
    result[0:2n] = words1^2.

    Перекрёстные произведения a_i * a_j (i < j) считаются один раз,
    удваиваются сдвигом и дополняются квадратами a_i^2.
    """
    clear_words(result, rstart, 2 * n)
    for i in range(n - 1):
        ai = words1[astart + i]
        carry = 0
        if ai:
            for j in range(i + 1, n):
                p = ai * words1[astart + j] + result[rstart + i + j] + carry
                result[rstart + i + j] = p & WORD_MASK
                carry = p >> WORD_BITS
        result[rstart + i + n] = carry
    shift_left_by_bits(result, rstart, 2 * n, 1)
    carry = 0
    for i in range(n):
        ai = words1[astart + i]
        sq = ai * ai
        lo = rstart + 2 * i
        s = result[lo] + (sq & WORD_MASK) + carry
        result[lo] = s & WORD_MASK
        s = (s >> WORD_BITS) + result[lo + 1] + (sq >> WORD_BITS)
        result[lo + 1] = s & WORD_MASK
        carry = s >> WORD_BITS


# =============================================================================
# РАЗВЁРНУТЫЕ ЯДРА: УМНОЖЕНИЕ
# =============================================================================


def baseline_multiply2(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
) -> None:
    """result[0:4] = words1[0:2] * words2[0:2]."""
    a0, a1 = words1[astart:astart + 2]
    b0, b1 = words2[bstart:bstart + 2]
    acc = a0 * b0
    result[rstart] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b1 + a1 * b0
    result[rstart + 1] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a1 * b1
    result[rstart + 2] = acc & WORD_MASK
    result[rstart + 3] = acc >> WORD_BITS


def baseline_multiply4(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
) -> None:
    """result[0:8] = words1[0:4] * words2[0:4]."""
    a0, a1, a2, a3 = words1[astart:astart + 4]
    b0, b1, b2, b3 = words2[bstart:bstart + 4]
    acc = a0 * b0
    result[rstart] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b1 + a1 * b0
    result[rstart + 1] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b2 + a1 * b1 + a2 * b0
    result[rstart + 2] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b3 + a1 * b2 + a2 * b1 + a3 * b0
    result[rstart + 3] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a1 * b3 + a2 * b2 + a3 * b1
    result[rstart + 4] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a2 * b3 + a3 * b2
    result[rstart + 5] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a3 * b3
    result[rstart + 6] = acc & WORD_MASK
    result[rstart + 7] = acc >> WORD_BITS


def baseline_multiply8(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
) -> None:
    """result[0:16] = words1[0:8] * words2[0:8]."""
    a0, a1, a2, a3, a4, a5, a6, a7 = words1[astart:astart + 8]
    b0, b1, b2, b3, b4, b5, b6, b7 = words2[bstart:bstart + 8]
    acc = a0 * b0
    result[rstart] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b1 + a1 * b0
    result[rstart + 1] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b2 + a1 * b1 + a2 * b0
    result[rstart + 2] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b3 + a1 * b2 + a2 * b1 + a3 * b0
    result[rstart + 3] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a0 * b4 + a1 * b3 + a2 * b2 + a3 * b1 + a4 * b0
    result[rstart + 4] = acc & WORD_MASK
    acc = ((acc >> WORD_BITS) + a0 * b5 + a1 * b4 + a2 * b3 + a3 * b2
           + a4 * b1 + a5 * b0)
    result[rstart + 5] = acc & WORD_MASK
    acc = ((acc >> WORD_BITS) + a0 * b6 + a1 * b5 + a2 * b4 + a3 * b3
           + a4 * b2 + a5 * b1 + a6 * b0)
    result[rstart + 6] = acc & WORD_MASK
    acc = ((acc >> WORD_BITS) + a0 * b7 + a1 * b6 + a2 * b5 + a3 * b4
           + a4 * b3 + a5 * b2 + a6 * b1 + a7 * b0)
    result[rstart + 7] = acc & WORD_MASK
    acc = ((acc >> WORD_BITS) + a1 * b7 + a2 * b6 + a3 * b5 + a4 * b4
           + a5 * b3 + a6 * b2 + a7 * b1)
    result[rstart + 8] = acc & WORD_MASK
    acc = ((acc >> WORD_BITS) + a2 * b7 + a3 * b6 + a4 * b5 + a5 * b4
           + a6 * b3 + a7 * b2)
    result[rstart + 9] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a3 * b7 + a4 * b6 + a5 * b5 + a6 * b4 + a7 * b3
    result[rstart + 10] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a4 * b7 + a5 * b6 + a6 * b5 + a7 * b4
    result[rstart + 11] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a5 * b7 + a6 * b6 + a7 * b5
    result[rstart + 12] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a6 * b7 + a7 * b6
    result[rstart + 13] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a7 * b7
    result[rstart + 14] = acc & WORD_MASK
    result[rstart + 15] = acc >> WORD_BITS


# =============================================================================
# РАЗВЁРНУТЫЕ ЯДРА: КВАДРАТ
# =============================================================================


def baseline_square2(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
) -> None:
    """result[0:4] = words1[0:2]^2."""
    a0, a1 = words1[astart:astart + 2]
    acc = a0 * a0
    result[rstart] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a1) << 1)
    result[rstart + 1] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a1 * a1
    result[rstart + 2] = acc & WORD_MASK
    result[rstart + 3] = acc >> WORD_BITS


def baseline_square4(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
) -> None:
    """result[0:8] = words1[0:4]^2."""
    a0, a1, a2, a3 = words1[astart:astart + 4]
    acc = a0 * a0
    result[rstart] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a1) << 1)
    result[rstart + 1] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a2) << 1) + a1 * a1
    result[rstart + 2] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a3 + a1 * a2) << 1)
    result[rstart + 3] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a1 * a3) << 1) + a2 * a2
    result[rstart + 4] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a2 * a3) << 1)
    result[rstart + 5] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a3 * a3
    result[rstart + 6] = acc & WORD_MASK
    result[rstart + 7] = acc >> WORD_BITS


def baseline_square8(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
) -> None:
    """result[0:16] = words1[0:8]^2."""
    a0, a1, a2, a3, a4, a5, a6, a7 = words1[astart:astart + 8]
    acc = a0 * a0
    result[rstart] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a1) << 1)
    result[rstart + 1] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a2) << 1) + a1 * a1
    result[rstart + 2] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a3 + a1 * a2) << 1)
    result[rstart + 3] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a4 + a1 * a3) << 1) + a2 * a2
    result[rstart + 4] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a5 + a1 * a4 + a2 * a3) << 1)
    result[rstart + 5] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a6 + a1 * a5 + a2 * a4) << 1) + a3 * a3
    result[rstart + 6] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a0 * a7 + a1 * a6 + a2 * a5 + a3 * a4) << 1)
    result[rstart + 7] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a1 * a7 + a2 * a6 + a3 * a5) << 1) + a4 * a4
    result[rstart + 8] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a2 * a7 + a3 * a6 + a4 * a5) << 1)
    result[rstart + 9] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a3 * a7 + a4 * a6) << 1) + a5 * a5
    result[rstart + 10] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a4 * a7 + a5 * a6) << 1)
    result[rstart + 11] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a5 * a7) << 1) + a6 * a6
    result[rstart + 12] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + ((a6 * a7) << 1)
    result[rstart + 13] = acc & WORD_MASK
    acc = (acc >> WORD_BITS) + a7 * a7
    result[rstart + 14] = acc & WORD_MASK
    result[rstart + 15] = acc >> WORD_BITS
