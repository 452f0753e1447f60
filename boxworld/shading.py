"""
Затенение: текстура в точке попадания и освещение по Фонгу.
"""

import numpy as np
from .math_utils import normalize_rows


def texture_coordinates(tex_u, tex_v, beta, gamma):
    """
    Барицентрическая интерполяция текстурных координат:
    U = U0 + (U1 - U0)*beta + (U2 - U0)*gamma, аналогично для V.
    """
    u = tex_u[:, 0] + (tex_u[:, 1] - tex_u[:, 0]) * beta + (tex_u[:, 2] - tex_u[:, 0]) * gamma
    v = tex_v[:, 0] + (tex_v[:, 1] - tex_v[:, 0]) * beta + (tex_v[:, 2] - tex_v[:, 0]) * gamma
    return u, v


def texture_color(store, materials, tri_index, beta, gamma):
    """
    Цвет текстуры для пикселей с попаданием.

    Параметры:
        store: хранилище геометрии
        materials: список текстур (индекс = material_id)
        tri_index, beta, gamma: попадания, только валидные (tri_index >= 0)

    Возвращает: массив (n, 3)
    """
    u, v = texture_coordinates(store.tex_u[tri_index], store.tex_v[tri_index], beta, gamma)
    mat_ids = store.material_ids[tri_index]

    colors = np.zeros((len(tri_index), 3))
    for mat_id in np.unique(mat_ids):
        sel = mat_ids == mat_id
        colors[sel] = materials[mat_id].lookup(u[sel], v[sel])
    return colors


def phong(eye, points, normals, lights):
    """
    Вклад всех источников света (диффузная + зеркальная составляющие).

    Параметры:
        eye: позиция камеры (3,)
        points: точки попадания (n, 3)
        normals: нормали треугольников в этих точках (n, 3)
        lights: список Light

    Возвращает: массив (n, 3)
    """
    result = np.zeros((points.shape[0], 3))
    if not lights:
        return result

    # Вектор от точки к камере
    view = normalize_rows(eye[None, :] - points)

    for light in lights:
        diff_color = light.diffuse * light.color
        spec_color = light.specular * light.color

        to_light = normalize_rows(light.position[None, :] - points)
        half = normalize_rows(view + to_light)

        n_dot_l = np.maximum(0.0, np.sum(normals * to_light, axis=1))
        n_dot_h = np.maximum(0.0, np.sum(normals * half, axis=1))

        result += (diff_color[None, :] * n_dot_l[:, None]
                   + spec_color[None, :] * (n_dot_h**light.phong_exp)[:, None])
    return result
