"""
Word Kernels — примитивы над отрезками слов

Все ядра работают с парами (буфер, смещение) и фиксированной длиной n,
ничего не выделяют и не проверяют границы. Выходной отрезок может
совпадать с входным: каждое слово читается до того, как в тот же
индекс записывается результат.

Возвращаемый перенос/заём всегда 0 или 1, если не сказано иное.
"""

from src.bigint.words.buffer import WORD_BITS, WORD_MASK


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare(
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
    n: int,
) -> int:
    """
    Лексикографическое сравнение n слов от старшего к младшему.

    Returns:
        -1, 0 или 1
    """
    for i in range(n - 1, -1, -1):
        an = words1[astart + i]
        bn = words2[bstart + i]
        if an != bn:
            return 1 if an > bn else -1
    return 0


def compare_with_one_bigger(
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
    words1_count: int,
) -> int:
    """Сравнение words1 (words1_count слов) с words2 на одно слово короче."""
    if words1[astart + words1_count - 1] != 0:
        return 1
    return compare(words1, astart, words2, bstart, words1_count - 1)


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add(
    c: list[int], cstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
    n: int,
) -> int:
    """c = words1 + words2 по n словам; возвращает перенос."""
    carry = 0
    for i in range(n):
        s = words1[astart + i] + words2[bstart + i] + carry
        c[cstart + i] = s & WORD_MASK
        carry = s >> WORD_BITS
    return carry


def add_uneven_size(
    c: list[int], cstart: int,
    words_big: list[int], big_start: int, big_count: int,
    words_small: list[int], small_start: int, small_count: int,
) -> int:
    """
    c = big + small, где small_count <= big_count.

    Перенос протягивается через старшие слова big; возвращается
    перенос из слова big_count - 1.
    """
    carry = add(c, cstart, words_big, big_start, words_small, small_start, small_count)
    for i in range(small_count, big_count):
        s = words_big[big_start + i] + carry
        c[cstart + i] = s & WORD_MASK
        carry = s >> WORD_BITS
    return carry


def subtract(
    c: list[int], cstart: int,
    words1: list[int], astart: int,
    words2: list[int], bstart: int,
    n: int,
) -> int:
    """c = words1 - words2 по модулю 2^(16n); возвращает заём."""
    borrow = 0
    for i in range(n):
        d = words1[astart + i] - words2[bstart + i] - borrow
        c[cstart + i] = d & WORD_MASK
        borrow = (d >> WORD_BITS) & 1
    return borrow


def increment(words: list[int], start: int, n: int, addend: int) -> int:
    """
    Прибавить одно слово addend к отрезку на месте.

    Returns:
        1, если отрезок переполнился, иначе 0
    """
    s = words[start] + addend
    words[start] = s & WORD_MASK
    if s <= WORD_MASK:
        return 0
    for i in range(start + 1, start + n):
        v = (words[i] + 1) & WORD_MASK
        words[i] = v
        if v != 0:
            return 0
    return 1


def decrement(words: list[int], start: int, n: int, subtrahend: int) -> int:
    """
    Вычесть одно слово subtrahend из отрезка на месте.

    Returns:
        1, если отрезок ушёл ниже нуля, иначе 0
    """
    d = words[start] - subtrahend
    words[start] = d & WORD_MASK
    if d >= 0:
        return 0
    for i in range(start + 1, start + n):
        tmp = words[i]
        words[i] = (tmp - 1) & WORD_MASK
        if tmp != 0:
            return 0
    return 1


def twos_complement(words: list[int], start: int, n: int) -> None:
    """Отрицание отрезка в дополнительном коде: decrement, затем инверсия."""
    if n == 0:
        return
    decrement(words, start, n, 1)
    for i in range(start, start + n):
        words[i] = ~words[i] & WORD_MASK


# =============================================================================
# СДВИГИ
# =============================================================================


def shift_left_by_bits(words: list[int], start: int, n: int, shift_bits: int) -> int:
    """
    Сдвиг отрезка влево на 0..15 бит.

    Returns:
        слово переноса: биты, вытолкнутые из старшего слова
    """
    carry = 0
    if shift_bits != 0:
        back = WORD_BITS - shift_bits
        for i in range(start, start + n):
            u = words[i]
            words[i] = ((u << shift_bits) & WORD_MASK) | carry
            carry = u >> back
    return carry


def shift_right_by_bits(words: list[int], start: int, n: int, shift_bits: int) -> int:
    """
    Сдвиг отрезка вправо на 0..15 бит.

    Returns:
        вытолкнутые младшие биты, выровненные к старшей части слова
    """
    carry = 0
    if shift_bits != 0:
        back = WORD_BITS - shift_bits
        for i in range(start + n - 1, start - 1, -1):
            u = words[i]
            words[i] = (u >> shift_bits) | carry
            carry = (u << back) & WORD_MASK
    return carry


def shift_right_by_bits_sign_extend(
    words: list[int], start: int, n: int, shift_bits: int
) -> int:
    """Сдвиг вправо с заполнением освободившихся бит единицами (знак)."""
    carry = 0
    if shift_bits != 0:
        back = WORD_BITS - shift_bits
        carry = (WORD_MASK << back) & WORD_MASK
        for i in range(start + n - 1, start - 1, -1):
            u = words[i]
            words[i] = (u >> shift_bits) | carry
            carry = (u << back) & WORD_MASK
    return carry


def shift_words_left(words: list[int], start: int, n: int, shift_words: int) -> None:
    """Сдвиг отрезка на shift_words слов к старшим; младшие заполняются нулями."""
    shift_words = min(shift_words, n)
    if shift_words == 0:
        return
    for i in range(n - 1, shift_words - 1, -1):
        words[start + i] = words[start + i - shift_words]
    for i in range(shift_words):
        words[start + i] = 0


def shift_words_right_sign_extend(
    words: list[int], start: int, n: int, shift_words: int
) -> None:
    """Сдвиг отрезка на shift_words слов к младшим; старшие заполняются 0xFFFF."""
    shift_words = min(shift_words, n)
    if shift_words == 0:
        return
    for i in range(n - shift_words):
        words[start + i] = words[start + i + shift_words]
    for i in range(n - shift_words, n):
        words[start + i] = WORD_MASK
