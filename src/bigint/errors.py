"""
Errors — иерархия исключений движка

Все ошибки обнаруживаются синхронно в точке вызова, отложенного
состояния ошибки нет. Каждый класс наследует и общий BigIntegerError,
и соответствующее встроенное исключение Python, чтобы вызывающий код
мог ловить либо то, либо другое.
"""


class BigIntegerError(Exception):
    """Базовое исключение движка произвольной точности."""


class InvalidArgumentError(BigIntegerError, ValueError):
    """
    Недопустимый аргумент.

    Отсутствующее значение (None), некорректная десятичная строка,
    отрицательный показатель степени, неположительный модуль,
    неверные границы подстроки или буфера.
    """


class DivisionByZeroError(BigIntegerError, ZeroDivisionError):
    """Нулевой делитель в divide/remainder/divide_and_remainder/mod."""


class IntegerOverflowError(BigIntegerError, OverflowError):
    """Значение не помещается в запрошенный нативный целый тип."""


class DivisionInvariantError(BigIntegerError, ArithmeticError):
    """
    Пробное частное потребовало больше коррекций, чем допускает оценка.

    Для нормализованного делителя число коррекций не превышает 2
    на каждую цифру частного. Срабатывание означает дефект ядра.
    """
