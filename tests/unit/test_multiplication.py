"""
Тесты для Multiplication Engine

Проверяет:
1. Развёрнутые ядра 2/4/8 против schoolbook
2. Рекурсивное умножение равных длин вокруг порога recursion_limit
3. Путь квадрата и сокращение до половинной длины
4. Несимметричное умножение: однословный, двухсловный, почти равный
   и блочный варианты
5. Размер scratch-области
"""

import random

import pytest

from src.bigint.engines.baseline import (
    baseline_multiply2,
    baseline_multiply4,
    baseline_multiply8,
    baseline_square2,
    baseline_square4,
    baseline_square8,
    linear_multiply,
    linear_multiply_add,
    multiply_by_two_words,
    schoolbook_multiply,
    schoolbook_square,
)
from src.bigint.engines.multiplication import (
    asymmetric_multiply,
    chunked_linear_multiply,
    multiply_words,
    recursion_scratch_size,
    recursive_square,
    same_size_multiply,
)
from src.bigint.errors import InvalidArgumentError
from src.bigint.words.buffer import WORD_MASK, allocate


def to_words(value: int, size: int) -> list[int]:
    return [(value >> (16 * i)) & WORD_MASK for i in range(size)]


def from_words(words: list[int]) -> int:
    return sum(word << (16 * i) for i, word in enumerate(words))


def full_words(size: int) -> list[int]:
    return [WORD_MASK] * size


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7081)


# =============================================================================
# ТЕСТЫ: BASELINE
# =============================================================================


class TestBaselineKernels:
    """Тесты ядер без рекурсии."""

    def test_unrolled_multiply_matches_schoolbook(self, rng: random.Random) -> None:
        """Развёрнутые ядра совпадают с schoolbook и с int."""
        kernels = {2: baseline_multiply2, 4: baseline_multiply4, 8: baseline_multiply8}
        for size, kernel in kernels.items():
            for _ in range(30):
                a = rng.getrandbits(16 * size)
                b = rng.getrandbits(16 * size)
                unrolled = allocate(2 * size)
                kernel(unrolled, 0, to_words(a, size), 0, to_words(b, size), 0)
                reference = allocate(2 * size)
                schoolbook_multiply(
                    reference, 0, to_words(a, size), 0, size, to_words(b, size), 0, size
                )
                assert unrolled == reference
                assert from_words(unrolled) == a * b

    def test_unrolled_multiply_all_ones(self) -> None:
        """Максимальные слова не теряют перенос между столбцами."""
        for size, kernel in ((2, baseline_multiply2), (4, baseline_multiply4),
                             (8, baseline_multiply8)):
            value = (1 << (16 * size)) - 1
            result = allocate(2 * size)
            kernel(result, 0, full_words(size), 0, full_words(size), 0)
            assert from_words(result) == value * value

    def test_unrolled_square(self, rng: random.Random) -> None:
        """Развёрнутые квадраты и schoolbook_square."""
        kernels = {2: baseline_square2, 4: baseline_square4, 8: baseline_square8}
        for size, kernel in kernels.items():
            for value in (rng.getrandbits(16 * size), (1 << (16 * size)) - 1):
                result = allocate(2 * size)
                kernel(result, 0, to_words(value, size), 0)
                assert from_words(result) == value * value
                generic = allocate(2 * size)
                schoolbook_square(generic, 0, to_words(value, size), 0, size)
                assert generic == result

    def test_schoolbook_square_odd_sizes(self, rng: random.Random) -> None:
        """schoolbook_square для длин, не имеющих развёрнутого ядра."""
        for size in (1, 3, 5, 7, 9):
            value = rng.getrandbits(16 * size)
            result = allocate(2 * size)
            schoolbook_square(result, 0, to_words(value, size), 0, size)
            assert from_words(result) == value * value

    def test_schoolbook_uneven(self, rng: random.Random) -> None:
        """Schoolbook с операндами разной длины."""
        a = rng.getrandbits(16 * 3)
        b = rng.getrandbits(16 * 7)
        result = allocate(10)
        schoolbook_multiply(result, 0, to_words(a, 3), 0, 3, to_words(b, 7), 0, 7)
        assert from_words(result) == a * b

    def test_linear_multiply_and_add(self) -> None:
        """Умножение на слово возвращает старшее слово произведения."""
        product = allocate(2)
        carry = linear_multiply(product, 0, [0xFFFF, 0xFFFF], 0, 0xFFFF, 2)
        assert from_words(product) + (carry << 32) == 0xFFFFFFFF * 0xFFFF
        acc = [1, 0]
        carry = linear_multiply_add(acc, 0, [2, 0], 0, 3, 2)
        assert carry == 0
        assert acc == [7, 0]

    def test_multiply_by_two_words(self, rng: random.Random) -> None:
        """Двухсловный множитель на операнд чётной длины."""
        for size in (2, 4, 6):
            multiplier = rng.getrandbits(32)
            value = rng.getrandbits(16 * size)
            result = allocate(size + 2)
            multiply_by_two_words(
                result, 0, multiplier & WORD_MASK, multiplier >> 16,
                to_words(value, size), 0, size,
            )
            assert from_words(result) == multiplier * value


# =============================================================================
# ТЕСТЫ: РЕКУРСИВНОЕ УМНОЖЕНИЕ
# =============================================================================


class TestSameSizeMultiply:
    """Тесты Karatsuba для операндов равной длины."""

    @pytest.mark.parametrize("count", [5, 9, 10, 11, 16, 17, 32, 50])
    def test_random_operands(self, rng: random.Random, count: int) -> None:
        """Произведение совпадает с int при limit = 4."""
        for _ in range(5):
            a = rng.getrandbits(16 * count)
            b = rng.getrandbits(16 * count)
            result = allocate(2 * count)
            temp = allocate(recursion_scratch_size(count, 4))
            same_size_multiply(
                result, 0, temp, 0, to_words(a, count), 0, to_words(b, count), 0, count, 4
            )
            assert from_words(result) == a * b

    @pytest.mark.parametrize("count", [9, 12, 17])
    def test_all_ones_operands(self, count: int) -> None:
        """Все слова 0xFFFF: максимальные промежуточные суммы."""
        value = (1 << (16 * count)) - 1
        result = allocate(2 * count)
        temp = allocate(recursion_scratch_size(count, 4))
        same_size_multiply(
            result, 0, temp, 0, full_words(count), 0, full_words(count), 0, count, 4
        )
        assert from_words(result) == value * value

    def test_mixed_half_differences(self) -> None:
        """Разные знаки разностей половин у двух операндов."""
        count = 12
        # У a младшая половина больше старшей, у b наоборот
        a = ((1 << (16 * 6)) - 1) | (1 << (16 * 6))
        b = 1 | (((1 << (16 * 6)) - 1) << (16 * 6))
        result = allocate(2 * count)
        temp = allocate(recursion_scratch_size(count, 4))
        same_size_multiply(
            result, 0, temp, 0, to_words(a, count), 0, to_words(b, count), 0, count, 4
        )
        assert from_words(result) == a * b

    def test_zero_high_halves_shortcut(self, rng: random.Random) -> None:
        """Нулевые старшие половины: одно умножение половинной длины."""
        count = 16
        a = rng.getrandbits(16 * 8)
        b = rng.getrandbits(16 * 8)
        result = [0xAAAA] * (2 * count)
        temp = allocate(recursion_scratch_size(count, 4))
        same_size_multiply(
            result, 0, temp, 0, to_words(a, count), 0, to_words(b, count), 0, count, 4
        )
        assert from_words(result) == a * b

    def test_result_at_offset(self, rng: random.Random) -> None:
        """Результат и операнды со смещением внутри буферов."""
        count = 11
        a = rng.getrandbits(16 * count)
        b = rng.getrandbits(16 * count)
        words1 = [0x1234] * 3 + to_words(a, count)
        words2 = [0x4321] * 5 + to_words(b, count)
        result = [0x5555] * (2 * count + 4)
        temp = allocate(recursion_scratch_size(count, 4) + 7)
        same_size_multiply(result, 2, temp, 7, words1, 3, words2, 5, count, 4)
        assert from_words(result[2:2 + 2 * count]) == a * b
        assert result[:2] == [0x5555, 0x5555]
        assert result[2 + 2 * count:] == [0x5555, 0x5555]


class TestRecursiveSquare:
    """Тесты рекурсивного возведения в квадрат."""

    @pytest.mark.parametrize("count", [6, 9, 12, 16, 21, 32])
    def test_square_matches_multiply(self, rng: random.Random, count: int) -> None:
        """Квадрат совпадает с умножением на себя."""
        value = rng.getrandbits(16 * count)
        words = to_words(value, count)
        squared = allocate(2 * count)
        recursive_square(
            squared, 0, allocate(recursion_scratch_size(count, 4)), 0, words, 0, count, 4
        )
        product = allocate(2 * count)
        same_size_multiply(
            product, 0, allocate(recursion_scratch_size(count, 4)), 0,
            words, 0, words, 0, count, 4,
        )
        assert squared == product
        assert from_words(squared) == value * value

    def test_square_all_ones(self) -> None:
        """Квадрат максимального значения."""
        count = 16
        value = (1 << (16 * count)) - 1
        result = allocate(2 * count)
        recursive_square(
            result, 0, allocate(recursion_scratch_size(count, 4)), 0,
            full_words(count), 0, count, 4,
        )
        assert from_words(result) == value * value


class TestScratchSize:
    """Тесты размера scratch-области."""

    def test_no_scratch_below_limit(self) -> None:
        """Ниже порога scratch не нужен."""
        assert recursion_scratch_size(1, 10) == 0
        assert recursion_scratch_size(10, 10) == 0

    def test_levels_accumulate(self) -> None:
        """Каждый уровень добавляет 2L + 2 слова."""
        # 17 -> L = 9 -> L = 5 -> L = 3
        assert recursion_scratch_size(17, 4) == 20 + 12 + 8


# =============================================================================
# ТЕСТЫ: НЕСИММЕТРИЧНОЕ УМНОЖЕНИЕ
# =============================================================================


class TestAsymmetricMultiply:
    """Тесты выбора варианта для операндов разной длины."""

    @pytest.mark.parametrize(
        "acount,bcount",
        [(1, 7), (2, 6), (2, 7), (3, 5), (9, 10), (9, 11), (12, 30), (5, 41), (40, 13)],
    )
    def test_random_shapes(self, rng: random.Random, acount: int, bcount: int) -> None:
        """Произведение совпадает с int для разных соотношений длин."""
        a = rng.getrandbits(16 * acount) | (1 << (16 * acount - 1))
        b = rng.getrandbits(16 * bcount) | (1 << (16 * bcount - 1))
        result = allocate(acount + bcount)
        asymmetric_multiply(
            result, 0, to_words(a, acount), 0, acount, to_words(b, bcount), 0, bcount, 4
        )
        assert from_words(result) == a * b

    def test_two_words_with_zero_top(self) -> None:
        """Двухсловный операнд с нулевым старшим словом идёт линейно."""
        b = (1 << 80) - 3
        result = [0x7777] * 7
        asymmetric_multiply(result, 0, [3, 0], 0, 2, to_words(b, 5), 0, 5, 4)
        assert from_words(result) == 3 * b

    def test_zero_and_one_word_operand(self) -> None:
        """Однословные 0 и 1 обрабатываются без умножения."""
        b = (1 << 60) + 12345
        result = [0x7777] * 6
        asymmetric_multiply(result, 0, [0], 0, 1, to_words(b, 5), 0, 5, 4)
        assert result == [0] * 6
        asymmetric_multiply(result, 0, [1], 0, 1, to_words(b, 5), 0, 5, 4)
        assert from_words(result) == b

    def test_chunked_linear_multiply(self, rng: random.Random) -> None:
        """Блочное умножение длинного операнда с неполным хвостом."""
        a = rng.getrandbits(16 * 29)
        b = rng.getrandbits(16 * 6)
        result = [0x9999] * 35
        chunked_linear_multiply(result, 0, to_words(a, 29), 0, 29, to_words(b, 6), 0, 6, 4)
        assert from_words(result) == a * b

    def test_near_equal_threshold_keeps_result(self, rng: random.Random) -> None:
        """Порог near_equal_extra_words не влияет на результат."""
        a = rng.getrandbits(16 * 10)
        b = rng.getrandbits(16 * 14)
        for extra in (0, 2, 4, 8):
            result = allocate(24)
            asymmetric_multiply(
                result, 0, to_words(a, 10), 0, 10, to_words(b, 14), 0, 14, 4, extra
            )
            assert from_words(result) == a * b


# =============================================================================
# ТЕСТЫ: ТОЧКА ВХОДА
# =============================================================================


class TestMultiplyWords:
    """Тесты multiply_words."""

    def test_result_length_is_sum_of_counts(self) -> None:
        """Длина результата равна сумме длин операндов."""
        result = multiply_words([1, 2, 3], 3, [4, 5], 2, 10)
        assert len(result) == 5
        assert from_words(result) == from_words([1, 2, 3]) * from_words([4, 5])

    def test_zero_operand(self) -> None:
        """Нулевая длина даёт нулевой результат."""
        assert multiply_words([], 0, [7], 1, 10) == [0]

    def test_same_buffer_takes_square_path(self, rng: random.Random) -> None:
        """Один и тот же буфер возводится в квадрат."""
        value = rng.getrandbits(16 * 24)
        words = to_words(value, 24)
        assert from_words(multiply_words(words, 24, words, 24, 4)) == value * value

    @pytest.mark.parametrize("limit", [4, 10, 32])
    def test_limit_does_not_change_result(self, rng: random.Random, limit: int) -> None:
        """Порог рекурсии влияет только на путь вычисления."""
        a = rng.getrandbits(16 * 33)
        b = rng.getrandbits(16 * 33)
        result = multiply_words(to_words(a, 33), 33, to_words(b, 33), 33, limit)
        assert from_words(result) == a * b

    def test_extent_is_checked(self) -> None:
        """Длина больше буфера отклоняется."""
        with pytest.raises(InvalidArgumentError, match="multiplicand"):
            multiply_words([1], 2, [1], 1, 10)
