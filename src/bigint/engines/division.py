"""
Division Engine — деление модулей

Уровни:
- divide_32_by_16: восстанавливающее деление 32-битного на 16-битное
- divide_three_words_by_two / divide_four_words_by_two: деление окна
  делимого на два старших слова нормализованного делителя
- fast_divide_and_remainder: делитель из одного слова
- divide_words: нормализованное длинное деление (Knuth D), цифра
  частного равна двум словам

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. После нормализации старший бит делителя установлен
2. Окно остатка перед очередной цифрой меньше делителя * 2^32
3. Пробная цифра частного корректируется не более MAX_TRIAL_CORRECTIONS раз,
   превышение означает дефект и поднимает DivisionInvariantError
"""

import logging
from typing import Final

from src.bigint.engines.baseline import multiply_by_two_words
from src.bigint.errors import DivisionByZeroError, DivisionInvariantError
from src.bigint.words.buffer import (
    WORD_BITS,
    WORD_MASK,
    allocate,
    copy_words,
    make_uint,
    require_extent,
    roundup_size,
)
from src.bigint.words.kernels import (
    add,
    compare,
    decrement,
    increment,
    shift_left_by_bits,
    shift_right_by_bits,
    subtract,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Для делителя со старшим битом, установленным в старшем слове,
# пробное частное превышает истинное не более чем на 2
MAX_TRIAL_CORRECTIONS: Final[int] = 2


# =============================================================================
# ПРИМИТИВЫ
# =============================================================================


def divide_32_by_16(dividend: int, divisor: int, return_remainder: bool) -> int:
    """
    Восстанавливающее деление 32-битного числа на 16-битное.

    Частное обязано помещаться в 16 бит (dividend < divisor * 2^16).

    Examples:
        >>> divide_32_by_16(0xFFFEFFFF, 0xFFFF, False)
        65535
        >>> divide_32_by_16(0x80000005, 0x8001, True)
        7
    """
    remainder = 0
    quotient = 0
    for shift in range(31, -1, -1):
        remainder = (remainder << 1) | ((dividend >> shift) & 1)
        quotient <<= 1
        if remainder >= divisor:
            remainder -= divisor
            quotient |= 1
    if return_remainder:
        return remainder & WORD_MASK
    return quotient & WORD_MASK


def divide_unsigned(x: int, y: int) -> int:
    """Частное x // y: нативно при x < 2^31, иначе восстанавливающим делением."""
    if (x >> 31) == 0:
        return x // y
    return divide_32_by_16(x, y, False)


def remainder_unsigned(x: int, y: int) -> int:
    """Остаток x % y: нативно при x < 2^31, иначе восстанавливающим делением."""
    if (x >> 31) == 0:
        return x % y
    return divide_32_by_16(x, y, True)


def divide_three_words_by_two(words: list[int], start: int, b0: int, b1: int) -> int:
    """
    Деление words[start:start + 3] на (b1:b0) с одним словом частного.

    Требования: b1 >= 0x8000 и (words[start+2]:words[start+1]) < (b1:b0).
    Остаток записывается на место делимого: words[start], words[start+1],
    words[start+2] = 0.

    Пробное частное берётся из деления двух старших слов на b1
    и уменьшается, пока остаток отрицателен.

    Raises:
        DivisionInvariantError: если коррекций больше MAX_TRIAL_CORRECTIONS
    """
    w0 = words[start]
    w1 = words[start + 1]
    w2 = words[start + 2]
    if w2 == b1:
        q = WORD_MASK
    else:
        q = divide_unsigned(make_uint(w1, w2), b1)
    divisor = make_uint(b0, b1)
    remainder = ((w2 << 32) | (w1 << WORD_BITS) | w0) - q * divisor
    corrections = 0
    while remainder < 0:
        corrections += 1
        if corrections > MAX_TRIAL_CORRECTIONS:
            raise DivisionInvariantError(
                f"3-by-2 trial quotient needs more than {MAX_TRIAL_CORRECTIONS} "
                f"corrections (divisor {divisor:#x})"
            )
        q -= 1
        remainder += divisor
    words[start] = remainder & WORD_MASK
    words[start + 1] = (remainder >> WORD_BITS) & WORD_MASK
    words[start + 2] = 0
    return q


def divide_four_words_by_two(
    quotient: list[int], qstart: int,
    words: list[int], start: int,
    b0: int, b1: int,
) -> None:
    """
    Двухсловное частное от деления words[start:start + 4] на (b1:b0).

    Делимое не изменяется. Требование: два старших слова < (b1:b0).
    """
    window = words[start:start + 4]
    quotient[qstart + 1] = divide_three_words_by_two(window, 1, b0, b1)
    quotient[qstart] = divide_three_words_by_two(window, 0, b0, b1)


# =============================================================================
# ДЕЛИТЕЛЬ ИЗ ОДНОГО СЛОВА
# =============================================================================


def fast_divide_and_remainder(
    quotient: list[int], qstart: int,
    dividend: list[int], dstart: int,
    count: int, divisor: int,
) -> int:
    """
    quotient = dividend // divisor для однословного divisor.

    Частное может записываться поверх делимого (quotient is dividend).

    Returns:
        остаток
    """
    rem = 0
    for i in range(count - 1, -1, -1):
        current = (rem << WORD_BITS) | dividend[dstart + i]
        q = divide_unsigned(current, divisor)
        quotient[qstart + i] = q
        rem = current - q * divisor
    return rem


def fast_remainder(dividend: list[int], count: int, divisor: int) -> int:
    """dividend % divisor для однословного divisor."""
    rem = 0
    for i in range(count - 1, -1, -1):
        rem = remainder_unsigned((rem << WORD_BITS) | dividend[i], divisor)
    return rem


# =============================================================================
# ДЛИННОЕ ДЕЛЕНИЕ
# =============================================================================


def _long_divide(
    dividend: list[int], dcount: int,
    divisor: list[int], vcount: int,
) -> tuple[list[int], list[int]]:
    """Knuth D по цифрам из двух слов; vcount >= 2, dcount >= vcount."""
    n = roundup_size(vcount)
    m = roundup_size(dcount)

    # Нечётная длина делителя: старшее слово пары пусто, сдвиг на слово
    shift_words = n - vcount
    shift_bits = WORD_BITS - divisor[vcount - 1].bit_length()

    v = allocate(n)
    copy_words(divisor, 0, v, shift_words, vcount)
    shift_left_by_bits(v, 0, n, shift_bits)
    u = allocate(m + 2)
    copy_words(dividend, 0, u, shift_words, dcount)
    shift_left_by_bits(u, 0, m + 2, shift_bits)

    b0 = v[n - 2]
    b1 = v[n - 1]
    quotient = allocate(m - n + 2)
    product = allocate(n + 2)
    for i in range(m - n, -1, -2):
        # Окно u[i:i + n + 2]; старшая цифра окна не больше (b1:b0)
        if u[i + n + 1] == b1 and u[i + n] == b0:
            quotient[i] = WORD_MASK
            quotient[i + 1] = WORD_MASK
        else:
            divide_four_words_by_two(quotient, i, u, i + n - 2, b0, b1)

        multiply_by_two_words(product, 0, quotient[i], quotient[i + 1], v, 0, n)
        borrow = subtract(u, i, u, i, product, 0, n + 2)
        corrections = 0
        while borrow:
            corrections += 1
            _check_corrections(corrections, i)
            carry = add(u, i, u, i, v, 0, n)
            if carry:
                borrow -= increment(u, i + n, 2, carry)
            decrement(quotient, i, 2, 1)
        while u[i + n] or u[i + n + 1] or compare(u, i, v, 0, n) >= 0:
            corrections += 1
            _check_corrections(corrections, i)
            if subtract(u, i, u, i, v, 0, n):
                decrement(u, i + n, 2, 1)
            increment(quotient, i, 2, 1)
        if corrections and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "long division: digit at word %d corrected %d time(s)",
                i, corrections,
            )

    # Денормализация остатка: отбросить shift_words слов и shift_bits бит
    remainder = u[shift_words:n]
    shift_right_by_bits(remainder, 0, len(remainder), shift_bits)
    return quotient, remainder


def _check_corrections(corrections: int, position: int) -> None:
    if corrections > MAX_TRIAL_CORRECTIONS:
        raise DivisionInvariantError(
            f"trial quotient at word {position} needs more than "
            f"{MAX_TRIAL_CORRECTIONS} corrections"
        )


def divide_words(
    dividend: list[int], dcount: int,
    divisor: list[int], vcount: int,
) -> tuple[list[int], list[int]]:
    """
    Частное и остаток модулей dividend[0:dcount] / divisor[0:vcount].

    Returns:
        (quotient, remainder): новые, не усечённые буферы

    Raises:
        DivisionByZeroError: если делитель равен нулю
    """
    require_extent(dividend, 0, dcount, "dividend")
    require_extent(divisor, 0, vcount, "divisor")
    if vcount == 0:
        raise DivisionByZeroError("division by zero")
    if dcount < vcount or (
        dcount == vcount
        and compare(dividend, 0, divisor, 0, dcount) < 0
    ):
        return allocate(1), dividend[:dcount]
    if vcount == 1:
        quotient = allocate(dcount)
        rem = fast_divide_and_remainder(quotient, 0, dividend, 0, dcount, divisor[0])
        return quotient, [rem]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("long division: %d / %d words", dcount, vcount)
    return _long_divide(dividend, dcount, divisor, vcount)
