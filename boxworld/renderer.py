"""
Ядро рендеринга методом бросания лучей (ray casting).
"""

import numpy as np
from .geometry import intersect_scene
from .shading import texture_color, phong
from .logger import logger


def render_sample(store, materials, lights, camera, i_aa):
    """
    Один сэмпл антиалиасинга для всех пикселей.

    Алгоритм:
    1. Строим направления лучей для сэмпла i_aa
    2. Для каждого луча находим ближайший треугольник
    3. Глубина = t * проекция направления на ось камеры
    4. Цвет = текстура + вклад источников света (складываются)

    Возвращает: (image (n_px, 3), depth (n_px,), n_hit); пиксели без
    попадания - нули
    """
    directions, zd = camera.directions(i_aa)
    n_px = directions.shape[0]
    image = np.zeros((n_px, 3))
    depth = np.zeros(n_px)

    t_min, tri_index, beta, gamma = intersect_scene(
        camera.position, directions, store.vertices, camera.t0, camera.t1
    )
    hit = np.flatnonzero(tri_index >= 0)
    if hit.size == 0:
        return image, depth, 0

    tri = tri_index[hit]
    depth[hit] = t_min[hit] * zd[hit]

    # Текстура - базовый цвет, освещение добавляется к нему, а не умножается
    image[hit] = texture_color(store, materials, tri, beta[hit], gamma[hit])
    if lights:
        points = camera.position[None, :] + t_min[hit, None] * directions[hit]
        image[hit] += phong(camera.position, points, store.normals[tri], lights)
    return image, depth, hit.size


def render_frame(store, materials, lights, camera):
    """
    Рендеринг кадра: сэмплы антиалиасинга суммируются и усредняются.

    Возвращает:
        image: (n_y, n_x, 3)
        depth: (n_y, n_x) - глубина вдоль оптической оси камеры
    """
    n_y, n_x = camera.resolution
    image = np.zeros((n_y * n_x, 3))
    depth = np.zeros(n_y * n_x)
    n_hit = 0

    for i_aa in range(camera.n_aa):
        sample_image, sample_depth, sample_hits = render_sample(
            store, materials, lights, camera, i_aa
        )
        image += sample_image
        depth += sample_depth
        n_hit += sample_hits

    logger.debug(f"[Renderer] {n_x}x{n_y} px, {len(store)} triangles, "
                 f"{camera.n_aa} samples, {len(lights)} lights, {n_hit} hits")
    return image.reshape(n_y, n_x, 3) / camera.n_aa, depth.reshape(n_y, n_x) / camera.n_aa
