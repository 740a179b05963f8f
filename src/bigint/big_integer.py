"""
BigInteger — неизменяемое целое произвольной точности

Хранение: знак + модуль (список 16-битных слов, младшее первым) +
число значащих слов. Дополнительный код строится только временно,
внутри побитовых операций, сдвига вправо отрицательных чисел и
преобразования в массив байт.

Деление усекающее: частное округляется к нулю, остаток имеет знак
делимого. mod() даёт неотрицательный остаток.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ноль никогда не бывает отрицательным
2. Старшее значащее слово ненулевое (count == 0 для нуля)
3. Буфер опубликованного значения не изменяется; negate() и abs()
   разделяют буфер с исходным значением
"""

from typing import Final, NamedTuple, Optional

from src.bigint.config import current_tuning
from src.bigint.engines.addition import (
    add_magnitudes,
    compare_magnitudes,
    subtract_magnitudes,
)
from src.bigint.engines.conversion import (
    digit_count,
    format_decimal,
    from_byte_array,
    parse_decimal,
    signed_bit_length,
    to_byte_array,
)
from src.bigint.engines.division import divide_words, fast_remainder
from src.bigint.engines.multiplication import multiply_words
from src.bigint.errors import IntegerOverflowError, InvalidArgumentError
from src.bigint.words.buffer import (
    WORD_BITS,
    WORD_HIGH_BIT,
    WORD_MASK,
    allocate,
    bits_to_words,
    count_words,
    native_value,
    unsigned_bit_length,
    words_from_native,
)
from src.bigint.words.kernels import (
    shift_left_by_bits,
    shift_right_by_bits,
    shift_right_by_bits_sign_extend,
    shift_words_left,
    shift_words_right_sign_extend,
    twos_complement,
)

# =============================================================================
# ДИАПАЗОНЫ НАТИВНЫХ ТИПОВ
# =============================================================================

INT32_MIN: Final[int] = -(1 << 31)
INT32_MAX: Final[int] = (1 << 31) - 1
INT64_MIN: Final[int] = -(1 << 63)
INT64_MAX: Final[int] = (1 << 63) - 1


class DivRem(NamedTuple):
    """Результат divide_and_remainder."""

    quotient: "BigInteger"
    remainder: "BigInteger"


class SqrtRem(NamedTuple):
    """Результат sqrt_with_remainder: root^2 + remainder == value."""

    root: "BigInteger"
    remainder: "BigInteger"


def _require(value: Optional["BigInteger"], name: str) -> "BigInteger":
    if value is None:
        raise InvalidArgumentError(f"{name} is None")
    if not isinstance(value, BigInteger):
        raise InvalidArgumentError(
            f"{name} must be BigInteger, got {type(value).__name__}"
        )
    return value


def _require_int(value: Optional[int], name: str) -> int:
    if value is None:
        raise InvalidArgumentError(f"{name} is None")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"{name} must be int, got {type(value).__name__}"
        )
    return value


class BigInteger:
    """
    Целое число произвольной точности.

    Экземпляры создаются фабриками value_of, from_string, from_substring,
    from_byte_array или арифметическими операциями.

    Examples:
        >>> a = BigInteger.from_string("123456789012345678901234567890")
        >>> str(a.multiply(a).divide(a))
        '123456789012345678901234567890'
    """

    __slots__ = ("_words", "_count", "_negative")

    ZERO: "BigInteger"
    ONE: "BigInteger"
    TEN: "BigInteger"

    def __init__(self, words: list[int], count: int, negative: bool) -> None:
        """Внутренний конструктор; words передаётся во владение значению."""
        count = count_words(words, count)
        object.__setattr__(self, "_words", words)
        object.__setattr__(self, "_count", count)
        object.__setattr__(self, "_negative", negative and count != 0)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("BigInteger is immutable")

    # =========================================================================
    # ФАБРИКИ
    # =========================================================================

    @classmethod
    def value_of(cls, value: int) -> "BigInteger":
        """
        Значение из нативного знакового 64-битного целого.

        Raises:
            InvalidArgumentError: если value не int или вне [-2^63, 2^63 - 1]
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(
                f"value must be int, got {type(value).__name__}"
            )
        if value < INT64_MIN or value > INT64_MAX:
            raise InvalidArgumentError(f"value {value} is outside the 64-bit range")
        if value == 0:
            return cls.ZERO
        negative = value < 0
        magnitude = -value if negative else value
        return cls(words_from_native(magnitude), 4, negative)

    @classmethod
    def from_string(cls, text: str) -> "BigInteger":
        """
        Разбор десятичной строки с необязательным ведущим '-'.

        Raises:
            InvalidArgumentError: пустая строка, нет цифр или посторонний символ
        """
        if text is None:
            raise InvalidArgumentError("text is None")
        return cls.from_substring(text, 0, len(text))

    @classmethod
    def from_substring(cls, text: str, index: int, end_index: int) -> "BigInteger":
        """Разбор десятичных цифр text[index:end_index]."""
        negative, words, count = parse_decimal(text, index, end_index)
        return cls(words, count, negative)

    @classmethod
    def from_byte_array(cls, data: bytes, little_endian: bool) -> "BigInteger":
        """Разбор дополнительного кода; пустой массив даёт ноль."""
        negative, words, count = from_byte_array(data, little_endian)
        return cls(words, count, negative)

    # =========================================================================
    # СВОЙСТВА
    # =========================================================================

    @property
    def sign(self) -> int:
        """-1, 0 или 1."""
        if self._count == 0:
            return 0
        return -1 if self._negative else 1

    @property
    def is_zero(self) -> bool:
        return self._count == 0

    @property
    def is_even(self) -> bool:
        return self._count == 0 or (self._words[0] & 1) == 0

    # =========================================================================
    # СЛОЖЕНИЕ И ВЫЧИТАНИЕ
    # =========================================================================

    def add(self, other: "BigInteger") -> "BigInteger":
        other = _require(other, "other")
        if other._count == 0:
            return self
        if self._count == 0:
            return other
        if self._negative == other._negative:
            words = add_magnitudes(self._words, self._count, other._words, other._count)
            return BigInteger(words, len(words), self._negative)
        flipped, words, count = subtract_magnitudes(
            self._words, self._count, other._words, other._count
        )
        return BigInteger(words, count, self._negative != flipped)

    def subtract(self, other: "BigInteger") -> "BigInteger":
        other = _require(other, "other")
        return self.add(other.negate())

    def negate(self) -> "BigInteger":
        """Значение с противоположным знаком; буфер слов общий."""
        if self._count == 0:
            return self
        return BigInteger(self._words, self._count, not self._negative)

    def abs(self) -> "BigInteger":
        return self.negate() if self._negative else self

    # =========================================================================
    # УМНОЖЕНИЕ И СТЕПЕНИ
    # =========================================================================

    def multiply(self, other: "BigInteger") -> "BigInteger":
        """
        Произведение; равные по значению операнды идут через путь квадрата.
        """
        other = _require(other, "other")
        if self._count == 0 or other._count == 0:
            return BigInteger.ZERO
        tuning = current_tuning()
        words2 = self._words if self == other else other._words
        words = multiply_words(
            self._words, self._count, words2, other._count,
            tuning.recursion_limit, tuning.near_equal_extra_words,
        )
        return BigInteger(words, len(words), self._negative != other._negative)

    def pow(self, exponent: int) -> "BigInteger":
        """
        Возведение в неотрицательную степень.

        Raises:
            InvalidArgumentError: если exponent < 0
        """
        exponent = _require_int(exponent, "exponent")
        if exponent < 0:
            raise InvalidArgumentError(f"exponent must be non-negative, got {exponent}")
        result = BigInteger.ONE
        base = self
        while exponent:
            if exponent & 1:
                result = result.multiply(base)
            exponent >>= 1
            if exponent:
                base = base.multiply(base)
        return result

    def pow_big(self, exponent: "BigInteger") -> "BigInteger":
        """Возведение в степень, заданную BigInteger."""
        exponent = _require(exponent, "exponent")
        if exponent._negative:
            raise InvalidArgumentError(f"exponent must be non-negative, got {exponent}")
        result = BigInteger.ONE
        base = self
        bits = exponent.unsigned_bit_length()
        for i in range(bits):
            if exponent.test_bit(i):
                result = result.multiply(base)
            if i + 1 < bits:
                base = base.multiply(base)
        return result

    def mod_pow(self, exponent: "BigInteger", modulus: "BigInteger") -> "BigInteger":
        """
        self^exponent mod modulus, результат в [0, modulus).

        Raises:
            InvalidArgumentError: если exponent < 0 или modulus <= 0
        """
        exponent = _require(exponent, "exponent")
        modulus = _require(modulus, "modulus")
        if exponent._negative:
            raise InvalidArgumentError(f"exponent must be non-negative, got {exponent}")
        if modulus.sign <= 0:
            raise InvalidArgumentError(f"modulus must be positive, got {modulus}")
        result = BigInteger.ONE.mod(modulus)
        base = self.mod(modulus)
        bits = exponent.unsigned_bit_length()
        for i in range(bits):
            if exponent.test_bit(i):
                result = result.multiply(base).mod(modulus)
            if i + 1 < bits:
                base = base.multiply(base).mod(modulus)
        return result

    # =========================================================================
    # ДЕЛЕНИЕ
    # =========================================================================

    def divide_and_remainder(self, divisor: "BigInteger") -> DivRem:
        """
        Усекающее деление: частное к нулю, остаток со знаком делимого.

        Raises:
            DivisionByZeroError: если divisor равен нулю
        """
        divisor = _require(divisor, "divisor")
        quotient, remainder = divide_words(
            self._words, self._count, divisor._words, divisor._count
        )
        return DivRem(
            BigInteger(quotient, len(quotient), self._negative != divisor._negative),
            BigInteger(remainder, len(remainder), self._negative),
        )

    def divide(self, divisor: "BigInteger") -> "BigInteger":
        return self.divide_and_remainder(divisor).quotient

    def remainder(self, divisor: "BigInteger") -> "BigInteger":
        divisor = _require(divisor, "divisor")
        if divisor._count == 1:
            rem = fast_remainder(self._words, self._count, divisor._words[0])
            return BigInteger([rem], 1, self._negative)
        return self.divide_and_remainder(divisor).remainder

    def mod(self, divisor: "BigInteger") -> "BigInteger":
        """
        Неотрицательный остаток в [0, divisor).

        Raises:
            InvalidArgumentError: если divisor < 0
            DivisionByZeroError: если divisor равен нулю
        """
        divisor = _require(divisor, "divisor")
        if divisor._negative:
            raise InvalidArgumentError(f"divisor must not be negative, got {divisor}")
        rem = self.remainder(divisor)
        if rem._negative:
            rem = rem.add(divisor)
        return rem

    # =========================================================================
    # ТЕОРИЯ ЧИСЕЛ
    # =========================================================================

    def gcd(self, other: "BigInteger") -> "BigInteger":
        """
        Наибольший общий делитель, всегда неотрицательный.

        Общая степень двойки выносится заранее и возвращается в конце.
        Пока операнды короче gcd_binary_word_limit слов, оба приводятся к
        нечётным, и шаг заменяет пару на (|a - b| без младших нулевых бит,
        min(a, b)); длинные операнды сокращаются остатком от деления.
        """
        other = _require(other, "other")
        if self._count == 0:
            return other.abs()
        if other._count == 0:
            return self.abs()
        limit = current_tuning().gcd_binary_word_limit
        a = self.abs()
        b = other.abs()
        shift = min(a.lowest_set_bit(), b.lowest_set_bit())
        a = a.shift_right(shift)
        b = b.shift_right(shift)
        while True:
            if b._count == 0:
                return a.shift_left(shift)
            if a._count == 0:
                return b.shift_left(shift)
            if a._count <= limit and b._count <= limit:
                # Оставшийся gcd нечётен: младшие нули обоих операндов лишние
                a = a.shift_right(a.lowest_set_bit())
                b = b.shift_right(b.lowest_set_bit())
                diff = a.subtract(b).abs()
                if diff._count == 0:
                    return a.shift_left(shift)
                smaller = a if a.compare_to(b) < 0 else b
                a = diff.shift_right(diff.lowest_set_bit())
                b = smaller
            else:
                a, b = b, a.remainder(b)

    def sqrt_with_remainder(self) -> SqrtRem:
        """
        Целый квадратный корень методом Ньютона.

        Для значений <= 0 возвращает (0, 0).
        """
        if self.sign <= 0:
            return SqrtRem(BigInteger.ZERO, BigInteger.ZERO)
        if self.can_fit_in_long():
            value = self.long_value()
            y = 1 << ((value.bit_length() + 1) >> 1)
            while True:
                x = y
                y = (x + value // x) >> 1
                if y >= x:
                    break
            return SqrtRem(BigInteger.value_of(x), BigInteger.value_of(value - x * x))
        y = BigInteger.ONE.shift_left((self.unsigned_bit_length() + 1) >> 1)
        while True:
            x = y
            y = x.add(self.divide(x)).shift_right(1)
            if y.compare_to(x) >= 0:
                break
        return SqrtRem(x, self.subtract(x.multiply(x)))

    def sqrt(self) -> "BigInteger":
        return self.sqrt_with_remainder().root

    # =========================================================================
    # СДВИГИ
    # =========================================================================

    def shift_left(self, bits: int) -> "BigInteger":
        """Умножение на 2^bits; отрицательный bits сдвигает вправо."""
        bits = _require_int(bits, "bits")
        if bits < 0:
            return self.shift_right(-bits)
        if bits == 0 or self._count == 0:
            return self
        shift_words = bits >> 4
        shift_bits = bits & (WORD_BITS - 1)
        size = self._count + bits_to_words(bits)
        words = self._words[:self._count] + allocate(size - self._count)
        shift_words_left(words, 0, size, shift_words)
        shift_left_by_bits(words, shift_words, size - shift_words, shift_bits)
        return BigInteger(words, size, self._negative)

    def shift_right(self, bits: int) -> "BigInteger":
        """
        Арифметический сдвиг вправо (floor деления на 2^bits).

        Отрицательное значение сдвигается в дополнительном коде с
        распространением знака; отрицательный bits сдвигает влево.
        """
        bits = _require_int(bits, "bits")
        if bits < 0:
            return self.shift_left(-bits)
        if bits == 0 or self._count == 0:
            return self
        shift_words = bits >> 4
        shift_bits = bits & (WORD_BITS - 1)
        if not self._negative:
            if shift_words >= self._count:
                return BigInteger.ZERO
            words = self._words[shift_words:self._count]
            shift_right_by_bits(words, 0, len(words), shift_bits)
            return BigInteger(words, len(words), False)
        size = self._count + 1
        words = self._words[:self._count] + [0]
        twos_complement(words, 0, size)
        shift_words_right_sign_extend(words, 0, size, shift_words)
        if shift_words < size:
            shift_right_by_bits_sign_extend(words, 0, size - shift_words, shift_bits)
        twos_complement(words, 0, size)
        return BigInteger(words, size, True)

    # =========================================================================
    # БИТОВЫЕ ЗАПРОСЫ
    # =========================================================================

    def unsigned_bit_length(self) -> int:
        """Битовая длина модуля."""
        return unsigned_bit_length(self._words, self._count)

    def bit_length(self) -> int:
        """Битовая длина в дополнительном коде (для отрицательных: |v| - 1)."""
        return signed_bit_length(self._negative, self._words, self._count)

    def test_bit(self, index: int) -> bool:
        """
        Бит index в дополнительном коде.

        Raises:
            InvalidArgumentError: если index < 0
        """
        index = _require_int(index, "index")
        if index < 0:
            raise InvalidArgumentError(f"bit index must be non-negative, got {index}")
        word_index = index >> 4
        bit = index & (WORD_BITS - 1)
        if not self._negative:
            if word_index >= self._count:
                return False
            return (self._words[word_index] >> bit) & 1 == 1
        if word_index >= self._count:
            return True
        word = self._words[word_index]
        # Заём из младших слов доходит до word_index, только если они нулевые
        if not any(self._words[:word_index]):
            word = (word - 1) & WORD_MASK
        return (~word >> bit) & 1 == 1

    def lowest_set_bit(self) -> int:
        """Индекс младшего единичного бита; 0 для нуля."""
        for i in range(self._count):
            word = self._words[i]
            if word:
                return (i << 4) + (word & -word).bit_length() - 1
        return 0

    def byte_count(self) -> int:
        """Число байт модуля; 0 для нуля."""
        if self._count == 0:
            return 0
        top = self._words[self._count - 1]
        return (self._count - 1) * 2 + (1 if top <= 0xFF else 2)

    def digit_count(self) -> int:
        """Число десятичных цифр модуля (1 для нуля)."""
        return digit_count(self._words, self._count)

    # =========================================================================
    # ПРЕОБРАЗОВАНИЯ
    # =========================================================================

    def to_string(self) -> str:
        return format_decimal(self._negative, self._words, self._count)

    def to_byte_array(self, little_endian: bool) -> bytes:
        """Минимальный дополнительный код в заданном порядке байт."""
        return to_byte_array(self._negative, self._words, self._count, little_endian)

    def can_fit_in_int(self) -> bool:
        if self._count > 2:
            return False
        magnitude = native_value(self._words, self._count)
        return magnitude <= (-INT32_MIN if self._negative else INT32_MAX)

    def can_fit_in_long(self) -> bool:
        if self._count > 4:
            return False
        if self._count < 4 or self._words[3] < WORD_HIGH_BIT:
            return True
        return self._negative and native_value(self._words, 4) == -INT64_MIN

    def int_value(self) -> int:
        """
        Значение как знаковое 32-битное целое.

        Raises:
            IntegerOverflowError: если значение вне [-2^31, 2^31 - 1]
        """
        if not self.can_fit_in_int():
            raise IntegerOverflowError(f"{self} does not fit in a 32-bit integer")
        return self._native()

    def long_value(self) -> int:
        """
        Значение как знаковое 64-битное целое.

        Raises:
            IntegerOverflowError: если значение вне [-2^63, 2^63 - 1]
        """
        if not self.can_fit_in_long():
            raise IntegerOverflowError(f"{self} does not fit in a 64-bit integer")
        return self._native()

    def _native(self) -> int:
        magnitude = native_value(self._words, self._count)
        return -magnitude if self._negative else magnitude

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "BigInteger") -> int:
        """Сравнение по знаковому значению: -1, 0 или 1."""
        other = _require(other, "other")
        if self._negative != other._negative:
            return -1 if self._negative else 1
        order = compare_magnitudes(self._words, self._count, other._words, other._count)
        return -order if self._negative else order

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, BigInteger):
            return NotImplemented
        return (
            self._negative == other._negative
            and self._count == other._count
            and self._words[:self._count] == other._words[:other._count]
        )

    def __hash__(self) -> int:
        return hash((self._negative, tuple(self._words[:self._count])))

    def __lt__(self, other: "BigInteger") -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: "BigInteger") -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: "BigInteger") -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: "BigInteger") -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare_to(other) >= 0

    # =========================================================================
    # ОПЕРАТОРЫ
    # =========================================================================

    def __add__(self, other: "BigInteger") -> "BigInteger":
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "BigInteger") -> "BigInteger":
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: "BigInteger") -> "BigInteger":
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.multiply(other)

    def __neg__(self) -> "BigInteger":
        return self.negate()

    def __abs__(self) -> "BigInteger":
        return self.abs()

    def __lshift__(self, bits: int) -> "BigInteger":
        return self.shift_left(bits)

    def __rshift__(self, bits: int) -> "BigInteger":
        return self.shift_right(bits)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInteger('{self.to_string()}')"


BigInteger.ZERO = BigInteger(allocate(1), 0, False)
BigInteger.ONE = BigInteger([1], 1, False)
BigInteger.TEN = BigInteger([10], 1, False)
