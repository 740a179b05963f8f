"""
Арифметические движки над модулями.

Каждая функция-точка входа проверяет границы буферов и выбирает
вариант алгоритма по числу слов операндов.
"""
