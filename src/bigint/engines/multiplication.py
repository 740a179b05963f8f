"""
Multiplication Engine — рекурсивное умножение и выбор алгоритма

Выбор варианта по числу слов операндов:
- одно слово: linear_multiply
- оба операнда не длиннее recursion_limit: schoolbook или развёрнутые
  ядра для 2/4/8 слов
- равные длины: рекурсивное разбиение пополам (Karatsuba)
- квадрат: отдельный путь с одним перекрёстным произведением
- разные длины: asymmetric_multiply (почти равные, блочное или
  двухсловное умножение)

Рекурсивные функции получают одну заранее выделенную scratch-область
(temp, tstart). Каждый уровень занимает в ней 2L + 2 слова (L = длина
младшей половины), вложенные вызовы работают строго выше этой зоны.
Размер области для n слов даёт recursion_scratch_size(n, limit).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат не перекрывается ни с операндами, ни со scratch
2. Результат умножения n x n слов занимает ровно 2n слов
3. Промежуточные суммы ведутся по модулю 2^(16m) для фиксированного m,
   истинное значение всегда лежит в [0, 2^(16m))
"""

import logging

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
from src.bigint.words.buffer import (
    WORD_BITS,
    WORD_MASK,
    allocate,
    clear_words,
    copy_words,
    require_extent,
)
from src.bigint.words.kernels import (
    add_uneven_size,
    compare,
    compare_with_one_bigger,
    subtract,
    twos_complement,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SCRATCH
# =============================================================================


def recursion_scratch_size(count: int, limit: int) -> int:
    """
    Размер scratch-области для same_size_multiply/recursive_square.

    Examples:
        >>> recursion_scratch_size(10, 10)
        0
        >>> recursion_scratch_size(16, 10)
        18
    """
    total = 0
    while count > limit:
        low = count - (count >> 1)
        total += 2 * low + 2
        count = low
    return total


# =============================================================================
# НЕРЕКУРСИВНЫЕ ВЕТКИ
# =============================================================================


def _multiply_small(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
    count: int,
) -> None:
    if count == 2:
        baseline_multiply2(result, rstart, words1, astart, words2, bstart)
    elif count == 4:
        baseline_multiply4(result, rstart, words1, astart, words2, bstart)
    elif count == 8:
        baseline_multiply8(result, rstart, words1, astart, words2, bstart)
    else:
        schoolbook_multiply(result, rstart, words1, astart, count, words2, bstart, count)


def _square_small(
    result: list[int], rstart: int,
    words1: list[int], astart: int,
    count: int,
) -> None:
    if count == 2:
        baseline_square2(result, rstart, words1, astart)
    elif count == 4:
        baseline_square4(result, rstart, words1, astart)
    elif count == 8:
        baseline_square8(result, rstart, words1, astart)
    else:
        schoolbook_square(result, rstart, words1, astart, count)


def _abs_half_difference(
    dest: list[int], dstart: int,
    words: list[int], start: int,
    low_count: int, high_count: int,
) -> bool:
    """
    dest[0:low_count] = |low - high| для половин операнда.

    Старшая половина (high_count слов) может быть на одно слово короче.

    Returns:
        True, если low >= high
    """
    high_start = start + low_count
    if low_count == high_count:
        low_wins = compare(words, start, words, high_start, low_count) >= 0
    else:
        low_wins = compare_with_one_bigger(words, start, words, high_start, low_count) >= 0
    if low_wins:
        borrow = subtract(dest, dstart, words, start, words, high_start, high_count)
        for i in range(high_count, low_count):
            d = words[start + i] - borrow
            dest[dstart + i] = d & WORD_MASK
            borrow = (d >> WORD_BITS) & 1
    else:
        borrow = subtract(dest, dstart, words, high_start, words, start, high_count)
        for i in range(high_count, low_count):
            d = -words[start + i] - borrow
            dest[dstart + i] = d & WORD_MASK
            borrow = (d >> WORD_BITS) & 1
    return low_wins


# =============================================================================
# РЕКУРСИВНОЕ УМНОЖЕНИЕ РАВНЫХ ДЛИН
# =============================================================================


def same_size_multiply(
    result: list[int], rstart: int,
    temp: list[int], tstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
    count: int, limit: int,
) -> None:
    """
    result[0:2*count] = words1[0:count] * words2[0:count].

    Операнды делятся на младшую половину L = ceil(count/2) и старшую
    H = floor(count/2). Три умножения половин:
    lowP = lowA*lowB, highP = highA*highB, cross = |lowA-highA|*|lowB-highB|.
    Средний член lowA*highB + highA*lowB = lowP + highP -/+ cross.

    Args:
        temp: scratch-область не меньше recursion_scratch_size(count, limit)
        limit: порог перехода на schoolbook/развёрнутые ядра
    """
    if count <= limit:
        _multiply_small(result, rstart, words1, astart, words2, bstart, count)
        return

    # Оба операнда умещаются в младшую половину: одно умножение вдвое короче
    if count % 2 == 0:
        half = count >> 1
        if (not any(words1[astart + half:astart + count])
                and not any(words2[bstart + half:bstart + count])):
            same_size_multiply(
                result, rstart, temp, tstart,
                words1, astart, words2, bstart, half, limit,
            )
            clear_words(result, rstart + count, count)
            return

    low_count = count - (count >> 1)
    high_count = count >> 1
    low2 = 2 * low_count
    cross = tstart
    sub_temp = tstart + low2 + 2

    # |lowA - highA| и |lowB - highB| временно занимают зону lowP
    low_wins_a = _abs_half_difference(
        result, rstart, words1, astart, low_count, high_count
    )
    low_wins_b = _abs_half_difference(
        result, rstart + low_count, words2, bstart, low_count, high_count
    )
    same_size_multiply(
        temp, cross, temp, sub_temp,
        result, rstart, result, rstart + low_count,
        low_count, limit,
    )
    # lowP -> result[0:2L], highP -> result[2L:2count]
    same_size_multiply(
        result, rstart, temp, sub_temp,
        words1, astart, words2, bstart,
        low_count, limit,
    )
    same_size_multiply(
        result, rstart + low2, temp, sub_temp,
        words1, astart + low_count, words2, bstart + low_count,
        high_count, limit,
    )

    # Средний член в temp[cross:cross + 2L + 1] по модулю 2^(16(2L+1))
    middle_count = low2 + 1
    temp[cross + low2] = 0
    if low_wins_a == low_wins_b:
        twos_complement(temp, cross, middle_count)
    add_uneven_size(temp, cross, temp, cross, middle_count, result, rstart, low2)
    add_uneven_size(
        temp, cross, temp, cross, middle_count,
        result, rstart + low2, 2 * high_count,
    )

    # Слова среднего члена выше 2count - L заведомо нулевые
    span = 2 * count - low_count
    add_uneven_size(
        result, rstart + low_count, result, rstart + low_count, span,
        temp, cross, min(middle_count, span),
    )


def recursive_square(
    result: list[int], rstart: int,
    temp: list[int], tstart: int,
    words1: list[int], astart: int,
    count: int, limit: int,
) -> None:
    """
    result[0:2*count] = words1[0:count]^2.

    Для чётного count: два квадрата половин и одно перекрёстное
    произведение lowA*highA, прибавляемое дважды со сдвигом на count/2.
    Нечётный count уходит в same_size_multiply.
    """
    if count <= limit:
        _square_small(result, rstart, words1, astart, count)
        return
    if count & 1:
        same_size_multiply(
            result, rstart, temp, tstart,
            words1, astart, words1, astart, count, limit,
        )
        return

    half = count >> 1
    sub_temp = tstart + count + 2
    recursive_square(result, rstart, temp, sub_temp, words1, astart, half, limit)
    recursive_square(
        result, rstart + count, temp, sub_temp, words1, astart + half, half, limit
    )
    same_size_multiply(
        temp, tstart, temp, sub_temp,
        words1, astart, words1, astart + half, half, limit,
    )
    span = count + half
    for _ in range(2):
        add_uneven_size(
            result, rstart + half, result, rstart + half, span,
            temp, tstart, count,
        )


# =============================================================================
# НЕСИММЕТРИЧНОЕ УМНОЖЕНИЕ
# =============================================================================


def chunked_linear_multiply(
    result: list[int], rstart: int,
    words_long: list[int], lstart: int, lcount: int,
    words_short: list[int], sstart: int, scount: int,
    limit: int,
    near_equal_extra_words: int = 2,
) -> None:
    """
    result[0:lcount + scount] = long * short блоками длины scount.

    Каждый блок длинного операнда умножается на короткий операнд
    (same_size_multiply), произведение прибавляется со сдвигом на
    смещение блока. Хвост короче scount идёт через asymmetric_multiply.
    """
    total = lcount + scount
    clear_words(result, rstart, total)
    block = allocate(2 * scount)
    scratch = allocate(recursion_scratch_size(scount, limit))
    for i in range(0, lcount, scount):
        diff = lcount - i
        if diff >= scount:
            same_size_multiply(
                block, 0, scratch, 0,
                words_long, lstart + i, words_short, sstart, scount, limit,
            )
            width = 2 * scount
        else:
            asymmetric_multiply(
                block, 0,
                words_long, lstart + i, diff,
                words_short, sstart, scount,
                limit, near_equal_extra_words,
            )
            width = diff + scount
        add_uneven_size(
            result, rstart + i, result, rstart + i, total - i,
            block, 0, width,
        )


def asymmetric_multiply(
    result: list[int], rstart: int,
    words1: list[int], astart: int, acount: int,
    words2: list[int], bstart: int, bcount: int,
    limit: int,
    near_equal_extra_words: int = 2,
) -> None:
    """
    result[0:acount + bcount] = words1 * words2 для любых длин >= 1.

    Scratch выделяется внутри на время вызова.
    """
    if acount == bcount:
        temp = allocate(recursion_scratch_size(acount, limit))
        if words1 is words2 and astart == bstart:
            recursive_square(result, rstart, temp, 0, words1, astart, acount, limit)
        else:
            same_size_multiply(
                result, rstart, temp, 0,
                words1, astart, words2, bstart, acount, limit,
            )
        return

    if acount > bcount:
        words1, astart, acount, words2, bstart, bcount = (
            words2, bstart, bcount, words1, astart, acount
        )
    total = acount + bcount

    if acount == 1 or (acount == 2 and words1[astart + 1] == 0):
        word = words1[astart]
        if word == 0:
            clear_words(result, rstart, total)
            return
        if word == 1:
            copy_words(words2, bstart, result, rstart, bcount)
        else:
            result[rstart + bcount] = linear_multiply(
                result, rstart, words2, bstart, word, bcount
            )
            bcount += 1
        clear_words(result, rstart + bcount, total - bcount)
        return

    if acount == 2 and bcount % 2 == 0:
        multiply_by_two_words(
            result, rstart, words1[astart], words1[astart + 1],
            words2, bstart, bcount,
        )
        return

    if acount <= limit and bcount <= limit:
        schoolbook_multiply(
            result, rstart, words1, astart, acount, words2, bstart, bcount
        )
        return

    extra = bcount - acount
    if extra <= near_equal_extra_words:
        # Общая часть как acount x acount, лишние старшие слова построчно
        temp = allocate(recursion_scratch_size(acount, limit))
        clear_words(result, rstart + 2 * acount, extra)
        same_size_multiply(
            result, rstart, temp, 0,
            words1, astart, words2, bstart, acount, limit,
        )
        for j in range(extra):
            result[rstart + 2 * acount + j] = linear_multiply_add(
                result, rstart + acount + j,
                words1, astart, words2[bstart + acount + j], acount,
            )
        return

    chunked_linear_multiply(
        result, rstart, words2, bstart, bcount, words1, astart, acount,
        limit, near_equal_extra_words,
    )


# =============================================================================
# ТОЧКА ВХОДА
# =============================================================================


def multiply_words(
    words1: list[int], count1: int,
    words2: list[int], count2: int,
    limit: int,
    near_equal_extra_words: int = 2,
) -> list[int]:
    """
    Произведение модулей words1[0:count1] * words2[0:count2].

    Если words1 is words2 и длины совпадают, используется путь квадрата.

    Returns:
        новый буфер из count1 + count2 слов (не усечённый)
    """
    require_extent(words1, 0, count1, "multiplicand")
    require_extent(words2, 0, count2, "multiplier")
    total = count1 + count2
    result = allocate(total)
    if count1 == 0 or count2 == 0:
        return result
    if count1 == 1:
        result[count2] = linear_multiply(result, 0, words2, 0, words1[0], count2)
        return result
    if count2 == 1:
        result[count1] = linear_multiply(result, 0, words1, 0, words2[0], count1)
        return result
    if words1 is words2 and count1 == count2:
        if count1 > limit and logger.isEnabledFor(logging.DEBUG):
            logger.debug("recursive square: %d words, limit %d", count1, limit)
        temp = allocate(recursion_scratch_size(count1, limit))
        recursive_square(result, 0, temp, 0, words1, 0, count1, limit)
        return result
    if max(count1, count2) > limit and logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "recursive multiply: %d x %d words, limit %d", count1, count2, limit
        )
    asymmetric_multiply(
        result, 0, words1, 0, count1, words2, 0, count2,
        limit, near_equal_extra_words,
    )
    return result
