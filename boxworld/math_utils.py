"""
Математические утилиты для работы с 3D векторами.
Одиночные векторы - через numba, пачки векторов - через numpy.
"""

import numpy as np
from numba import njit

# Добавка к детерминанту системы луч/треугольник: небольшое смещение
# вместо деления на ноль для вырожденных и параллельных лучу треугольников.
DETERMINANT_EPS = np.finfo(np.float64).eps

# Добавка к длине вектора при нормализации.
NORMALIZE_EPS = np.finfo(np.float64).eps


@njit(cache=True)
def dot(a, b):
    """Скалярное произведение двух векторов."""
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


@njit(cache=True)
def cross(a, b):
    """Векторное произведение двух векторов."""
    return np.array([
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0]
    ])


@njit(cache=True)
def length(v):
    """Длина вектора."""
    return np.sqrt(v[0]**2 + v[1]**2 + v[2]**2)


@njit(cache=True)
def normalize(v):
    """Нормализация вектора (приведение к единичной длине)."""
    return v / (length(v) + NORMALIZE_EPS)


def normalize_rows(vectors):
    """Нормализует каждую строку массива (n, 3)."""
    lengths = np.sqrt(np.sum(vectors**2, axis=1, keepdims=True))
    return vectors / (lengths + NORMALIZE_EPS)
