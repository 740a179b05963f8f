"""
Conversion Engine — десятичные строки и массивы байт

Разбор строки: цифры копятся в нативном аккумуляторе, пока он безопасно
помещается в 31 бит, затем переносятся в буфер слов и продолжают цикл
"умножить на 10, прибавить цифру" с ростом буфера только по переносу.

Форматирование: модуль до 64 бит выводится напрямую из нативного целого,
больший модуль делится на 10000 и даёт по четыре цифры за проход.

Число цифр оценивается по битовой длине (bitlen * log10(2) в fixed-point),
полное деление нужно только при неоднозначной оценке.

Массивы байт: дополнительный код минимальной длины, порядок байт
задаётся вызывающим.
"""

from bisect import bisect_right
from typing import Final, Optional

from src.bigint.engines.baseline import linear_multiply
from src.bigint.engines.division import fast_divide_and_remainder
from src.bigint.errors import InvalidArgumentError
from src.bigint.words.buffer import (
    WORD_BITS,
    WORD_MASK,
    allocate,
    count_words,
    grow_for_carry,
    native_value,
    require_extent,
    unsigned_bit_length,
)
from src.bigint.words.kernels import decrement, increment, twos_complement

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Аккумулятор * 10 + 9 остаётся ниже 2^31
NATIVE_ACCUMULATOR_LIMIT: Final[int] = 214748363

# Основание пакетного деления при форматировании
BATCH_RADIX: Final[int] = 10000
BATCH_DIGITS: Final[int] = 4

# Модуль до NATIVE_WORDS слов (64 бита) обрабатывается нативно
NATIVE_WORDS: Final[int] = 4

# (bits * 631305) >> 21 == floor(bits * log10(2)) при bits <= 2135
SMALL_LOG10_MAX_BITS: Final[int] = 2135
SMALL_LOG10_MULTIPLIER: Final[int] = 631305
SMALL_LOG10_SHIFT: Final[int] = 21

# (bits * 0x9A209A84FB) >> 41 == floor(bits * log10(2)) при bits <= 6432162
LARGE_LOG10_MAX_BITS: Final[int] = 6432162
LARGE_LOG10_MULTIPLIER: Final[int] = 0x9A209A84FB
LARGE_LOG10_SHIFT: Final[int] = 41

_POWERS_OF_TEN: Final[tuple[int, ...]] = tuple(10 ** k for k in range(1, 20))


# =============================================================================
# РАЗБОР СТРОКИ
# =============================================================================


def parse_decimal(text: str, start: int, end: int) -> tuple[bool, list[int], int]:
    """
    Разбор десятичных цифр text[start:end] с необязательным ведущим '-'.

    Args:
        text: исходная строка
        start: индекс первого символа
        end: индекс за последним символом

    Returns:
        (negative, words, count): знак (False для нуля), буфер и число
        значащих слов

    Raises:
        InvalidArgumentError: при пустом диапазоне, отсутствии цифр или
            первом же недопустимом символе

    Examples:
        >>> parse_decimal("-65536", 0, 6)[0]
        True
        >>> parse_decimal("-65536", 0, 6)[2]
        2
    """
    if text is None:
        raise InvalidArgumentError("text is None")
    if start < 0 or end > len(text) or start > end:
        raise InvalidArgumentError(
            f"invalid range [{start}, {end}) for string of length {len(text)}"
        )
    if start == end:
        raise InvalidArgumentError("empty string")

    negative = text[start] == "-"
    index = start + 1 if negative else start
    if index == end:
        raise InvalidArgumentError("no digits")

    words: Optional[list[int]] = None
    small = 0
    for position in range(index, end):
        ch = text[position]
        if not "0" <= ch <= "9":
            raise InvalidArgumentError(
                f"illegal character {ch!r} at position {position}"
            )
        digit = ord(ch) - 48
        if words is None:
            if small < NATIVE_ACCUMULATOR_LIMIT:
                small = small * 10 + digit
                continue
            words = allocate(NATIVE_WORDS)
            words[0] = small & WORD_MASK
            words[1] = small >> WORD_BITS
        carry = linear_multiply(words, 0, words, 0, 10, len(words))
        if carry:
            words = grow_for_carry(words, carry)
        if digit and increment(words, 0, len(words), digit):
            words = grow_for_carry(words, 1)

    if words is None:
        words = allocate(2)
        words[0] = small & WORD_MASK
        words[1] = small >> WORD_BITS
    count = count_words(words, len(words))
    return negative and count != 0, words, count


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_decimal(negative: bool, words: list[int], count: int) -> str:
    """
    Десятичная запись числа со знаком.

    Examples:
        >>> format_decimal(True, [0, 1], 2)
        '-65536'
        >>> format_decimal(False, [], 0)
        '0'
    """
    require_extent(words, 0, count, "words")
    if count == 0:
        return "0"
    if count <= NATIVE_WORDS:
        text = str(native_value(words, count))
    else:
        temp = words[:count]
        chunks = []
        while count > NATIVE_WORDS:
            chunks.append(
                fast_divide_and_remainder(temp, 0, temp, 0, count, BATCH_RADIX)
            )
            count = count_words(temp, count)
        parts = [str(native_value(temp, count))]
        parts.extend(f"{chunk:04d}" for chunk in reversed(chunks))
        text = "".join(parts)
    return "-" + text if negative else text


# =============================================================================
# ЧИСЛО ДЕСЯТИЧНЫХ ЦИФР
# =============================================================================


def approx_log10_of_2(bits: int) -> int:
    """
    floor(bits * log10(2)) для 0 <= bits <= LARGE_LOG10_MAX_BITS.

    Examples:
        >>> approx_log10_of_2(10)
        3
        >>> approx_log10_of_2(64)
        19
    """
    if bits <= SMALL_LOG10_MAX_BITS:
        return (bits * SMALL_LOG10_MULTIPLIER) >> SMALL_LOG10_SHIFT
    return (bits * LARGE_LOG10_MULTIPLIER) >> LARGE_LOG10_SHIFT


def _native_digit_count(value: int) -> int:
    return bisect_right(_POWERS_OF_TEN, value) + 1


def _estimate_digit_count(bits: int) -> Optional[int]:
    """Число цифр по битовой длине или None, если оценка неоднозначна."""
    if bits > LARGE_LOG10_MAX_BITS:
        return None
    low = approx_log10_of_2(bits - 1)
    high = approx_log10_of_2(bits)
    if low == high:
        return low + 1
    return None


def digit_count(words: list[int], count: int) -> int:
    """
    Число десятичных цифр модуля (1 для нуля).

    Examples:
        >>> digit_count([0x2710], 1)
        5
        >>> digit_count([], 0)
        1
    """
    require_extent(words, 0, count, "words")
    count = count_words(words, count)
    if count == 0:
        return 1
    if count <= NATIVE_WORDS:
        return _native_digit_count(native_value(words, count))
    temp: Optional[list[int]] = None
    digits = 0
    while True:
        estimate = _estimate_digit_count(unsigned_bit_length(temp or words, count))
        if estimate is not None:
            return digits + estimate
        # Оценка на границе степени десяти: отделить четыре цифры
        if temp is None:
            temp = words[:count]
        fast_divide_and_remainder(temp, 0, temp, 0, count, BATCH_RADIX)
        count = count_words(temp, count)
        digits += BATCH_DIGITS
        if count <= NATIVE_WORDS:
            return digits + _native_digit_count(native_value(temp, count))


# =============================================================================
# МАССИВЫ БАЙТ
# =============================================================================


def signed_bit_length(negative: bool, words: list[int], count: int) -> int:
    """
    Битовая длина в дополнительном коде без знакового бита.

    Для отрицательного числа это битовая длина abs(value) - 1.
    """
    if not negative:
        return unsigned_bit_length(words, count)
    magnitude = words[:count]
    decrement(magnitude, 0, count, 1)
    return unsigned_bit_length(magnitude, count)


def to_byte_array(
    negative: bool, words: list[int], count: int, little_endian: bool
) -> bytes:
    """
    Минимальный дополнительный код числа.

    Знаковый байт добавляется, только если без него старший бит
    изменил бы знак.

    Examples:
        >>> to_byte_array(False, [0x80], 1, False)
        b'\\x00\\x80'
        >>> to_byte_array(True, [0x80], 1, True)
        b'\\x80'
    """
    require_extent(words, 0, count, "words")
    if count == 0:
        return b"\x00"
    length = signed_bit_length(negative, words, count) // 8 + 1
    buffer = words[:count] + [0]
    if negative:
        twos_complement(buffer, 0, len(buffer))
    data = bytearray(length)
    for i in range(length):
        data[i] = (buffer[i >> 1] >> ((i & 1) << 3)) & 0xFF
    if not little_endian:
        data.reverse()
    return bytes(data)


def from_byte_array(data: bytes, little_endian: bool) -> tuple[bool, list[int], int]:
    """
    Разбор дополнительного кода.

    Returns:
        (negative, words, count)

    Raises:
        InvalidArgumentError: если data равен None
    """
    if data is None:
        raise InvalidArgumentError("data is None")
    if len(data) == 0:
        return False, allocate(1), 0
    ordered = bytes(data) if little_endian else bytes(data)[::-1]
    negative = (ordered[-1] & 0x80) != 0
    fill = 0xFF if negative else 0x00
    size = (len(ordered) + 1) >> 1
    words = allocate(size)
    for i in range(size):
        low = ordered[2 * i]
        high = ordered[2 * i + 1] if 2 * i + 1 < len(ordered) else fill
        words[i] = low | (high << 8)
    if negative:
        twos_complement(words, 0, size)
    count = count_words(words, size)
    return negative, words, count
