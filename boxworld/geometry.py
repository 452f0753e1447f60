"""
Геометрические примитивы: пересечение луча с треугольником, поиск
ближайшего пересечения и объекты сцены, отдающие себя треугольниками.
"""

import numpy as np
from numba import njit, prange
from . import math_utils
from .math_utils import cross, length, normalize


@njit(cache=True, error_model='numpy')
def ray_triangle_intersect(ray_origin, ray_dir, v0, v1, v2, t0, t1, eps):
    """
    Пересечение луча с треугольником (правило Крамера для системы 3x3).

    Система: origin + t*dir = v0 + beta*(v1 - v0) + gamma*(v2 - v0).
    К детерминанту добавляется eps, поэтому вырожденный треугольник
    или луч, параллельный его плоскости, не приводят к делению на ноль.

    Попадание засчитывается, если t0 <= t <= t1, 0 < gamma <= 1 и
    0 < beta <= 1 - gamma. Рёбра v0-v1 и v0-v2 открыты, ребро v1-v2
    закрыто; какому из соседних треугольников достанется общее ребро,
    определяет порядок их вершин.

    Возвращает:
        (t, beta, gamma); t = NaN, если пересечения нет
    """
    a = v0[0] - v1[0]
    b = v0[1] - v1[1]
    c = v0[2] - v1[2]
    d = v0[0] - v2[0]
    e = v0[1] - v2[1]
    f = v0[2] - v2[2]
    g = ray_dir[0]
    h = ray_dir[1]
    i = ray_dir[2]
    j = v0[0] - ray_origin[0]
    k = v0[1] - ray_origin[1]
    l = v0[2] - ray_origin[2]

    ei_hf = e*i - h*f
    gf_di = g*f - d*i
    dh_eg = d*h - e*g
    m = a*ei_hf + b*gf_di + c*dh_eg + eps

    ak_jb = a*k - j*b
    jc_al = j*c - a*l
    bl_kc = b*l - k*c

    # Порядок: t, затем gamma, затем beta - каждая проверка отсекает раньше
    t = -(f*ak_jb + e*jc_al + d*bl_kc) / m
    if not (t0 <= t and t <= t1):
        return np.nan, 0.0, 0.0

    gamma = (i*ak_jb + h*jc_al + g*bl_kc) / m
    if not (0.0 < gamma and gamma <= 1.0):
        return np.nan, 0.0, 0.0

    beta = (j*ei_hf + k*gf_di + l*dh_eg) / m
    if not (0.0 < beta and beta <= 1.0 - gamma):
        return np.nan, 0.0, 0.0

    return t, beta, gamma


@njit(cache=True)
def compute_triangle_normal(v0, v1, v2):
    """Вычисляет нормаль треугольника (направлена против часовой стрелки)."""
    return normalize(cross(v1 - v0, v2 - v0))


@njit(cache=True)
def triangle_double_area(v0, v1, v2):
    """Удвоенная площадь треугольника."""
    return length(cross(v1 - v0, v2 - v0))


def triangle_attributes(triangles):
    """
    Нормали, удвоенные площади и центроиды для массива треугольников (n, 3, 3).
    """
    n = triangles.shape[0]
    normals = np.zeros((n, 3), dtype=np.float64)
    areas = np.zeros(n, dtype=np.float64)
    for idx in range(n):
        v0, v1, v2 = triangles[idx]
        normals[idx] = compute_triangle_normal(v0, v1, v2)
        areas[idx] = triangle_double_area(v0, v1, v2)
    centroids = triangles.mean(axis=1)
    return normals, areas, centroids


class SceneObject:
    """
    Объект сцены, который умеет отдавать себя в виде треугольников.

    Наследники заполняют self._triangles (n, 3, 3), self._u и self._v (n, 3);
    хранилище геометрии забирает их через get_* при добавлении объекта.
    """

    def __init__(self, material_id: int):
        self.material_id = int(material_id)
        self._triangles = np.zeros((0, 3, 3), dtype=np.float64)
        self._u = np.zeros((0, 3), dtype=np.float64)
        self._v = np.zeros((0, 3), dtype=np.float64)

    def get_triangles(self):
        return self._triangles

    def get_texture_coordinates(self):
        return self._u, self._v

    def get_normals_areas(self):
        normals, areas, _ = triangle_attributes(self._triangles)
        return normals, areas

    def get_centroids(self):
        return self._triangles.mean(axis=1)


class Triangle(SceneObject):
    """Одиночный треугольник с явными текстурными координатами вершин."""

    def __init__(self, material_id, v0, v1, v2, u=(0.0, 1.0, 0.0), v=(0.0, 0.0, 1.0)):
        super().__init__(material_id)
        self._triangles = np.array([[v0, v1, v2]], dtype=np.float64)
        self._u = np.array([u], dtype=np.float64)
        self._v = np.array([v], dtype=np.float64)


class Plane(SceneObject):
    """
    Прямоугольник (параллелограмм), заданный тремя углами.

    p2 - общий угол, p1 и p3 - соседние с ним; четвёртый угол p1 + p3 - p2.
    Нормаль: cross(p1 - p2, p3 - p2). Текстурная координата U идёт вдоль
    p2 -> p3, V - вдоль p2 -> p1; обе нормированы на длинную сторону,
    чтобы тексели оставались квадратными.

    Диагональ p1-p3 закрыта только в первом треугольнике, из внешних
    рёбер закрыто одно: p4-p3.
    """

    def __init__(self, material_id, p1, p2, p3):
        super().__init__(material_id)
        p1 = np.asarray(p1, dtype=np.float64)[:3]
        p2 = np.asarray(p2, dtype=np.float64)[:3]
        p3 = np.asarray(p3, dtype=np.float64)[:3]
        p4 = p1 + p3 - p2

        len_u = np.linalg.norm(p3 - p2)
        len_v = np.linalg.norm(p1 - p2)
        side = max(len_u, len_v)
        if side == 0.0:
            raise ValueError("Plane: all corners coincide")
        su, sv = len_u / side, len_v / side

        # Нормали обоих треугольников совпадают с нормалью плоскости;
        # во втором диагональ - открытое ребро v0-v2
        self._triangles = np.array([
            [p2, p1, p3],
            [p1, p4, p3],
        ])
        self._u = np.array([
            [0.0, 0.0, su],
            [0.0, su, su],
        ])
        self._v = np.array([
            [0.0, sv, 0.0],
            [sv, sv, 0.0],
        ])


@njit(parallel=True, cache=True, error_model='numpy')
def _intersect_kernel(ray_origin, directions, vertices, t0, t1, eps):
    n_px = directions.shape[0]
    n_tri = vertices.shape[0]
    t_min = np.full(n_px, np.nan)
    tri_index = np.full(n_px, -1, dtype=np.int64)
    beta_out = np.zeros(n_px)
    gamma_out = np.zeros(n_px)

    # Каждый пиксель пишет только в свою ячейку
    for p in prange(n_px):
        best_t = np.inf
        best_i = -1
        best_beta = 0.0
        best_gamma = 0.0
        for i in range(n_tri):
            t, beta, gamma = ray_triangle_intersect(
                ray_origin, directions[p],
                vertices[i, 0], vertices[i, 1], vertices[i, 2],
                t0, t1, eps
            )
            # Строгое сравнение: при равных t остаётся меньший индекс
            if not np.isnan(t) and t < best_t:
                best_t = t
                best_i = i
                best_beta = beta
                best_gamma = gamma
        if best_i >= 0:
            t_min[p] = best_t
            tri_index[p] = best_i
            beta_out[p] = best_beta
            gamma_out[p] = best_gamma

    return t_min, tri_index, beta_out, gamma_out


def intersect_scene(ray_origin, directions, vertices, t0, t1):
    """
    Поиск ближайшего пересечения для каждого луча (перебор всех треугольников).

    Параметры:
        ray_origin: общее начало лучей (3,)
        directions: направления лучей (n_px, 3), не обязательно единичные
        vertices: вершины треугольников (n_tri, 3, 3)
        t0, t1: допустимый диапазон параметра луча

    Возвращает: (t_min, tri_index, beta, gamma)
        t_min: параметр ближайшего пересечения (NaN, если нет)
        tri_index: индекс треугольника (-1, если нет)
        beta, gamma: барицентрические координаты (0, если нет)
    """
    return _intersect_kernel(
        np.ascontiguousarray(ray_origin, dtype=np.float64)[:3],
        np.ascontiguousarray(directions, dtype=np.float64),
        np.ascontiguousarray(vertices, dtype=np.float64),
        float(t0), float(t1), math_utils.DETERMINANT_EPS,
    )

