"""
Word-level storage and kernels.

Буфер слов и примитивы над отрезками слов без выделения памяти.
"""

# Word Buffer
from src.bigint.words.buffer import (
    WORD_BITS,
    WORD_MASK,
    allocate,
    bits_to_words,
    count_words,
    grow_for_carry,
    require_extent,
    roundup_size,
    unsigned_bit_length,
)

# Word Kernels
from src.bigint.words.kernels import (
    add,
    add_uneven_size,
    compare,
    decrement,
    increment,
    shift_left_by_bits,
    shift_right_by_bits,
    shift_right_by_bits_sign_extend,
    shift_words_left,
    shift_words_right_sign_extend,
    subtract,
    twos_complement,
)

__all__ = [
    # Word Buffer
    "WORD_BITS",
    "WORD_MASK",
    "allocate",
    "bits_to_words",
    "count_words",
    "grow_for_carry",
    "require_extent",
    "roundup_size",
    "unsigned_bit_length",
    # Word Kernels
    "add",
    "add_uneven_size",
    "compare",
    "decrement",
    "increment",
    "shift_left_by_bits",
    "shift_right_by_bits",
    "shift_right_by_bits_sign_extend",
    "shift_words_left",
    "shift_words_right_sign_extend",
    "subtract",
    "twos_complement",
]
