"""
Создание сцены "мир-коробка": комната из пяти плоскостей без потолка.
"""

import numpy as np
from .scene import Scene
from .geometry import Plane
from .texture import Texture2D, checkerboard, dot_pattern, color_dot_pattern
from .camera import PinholeCamera, SphericalCamera
from .light import Light
from .logger import logger


def _texture(path, scale, fallback):
    if path:
        return Texture2D.from_file(path, scale)
    return Texture2D(fallback, scale)


def create_box_world(config: dict) -> Scene:
    """
    Создаёт комнату width x length x height (пол y = 0, центр в начале координат),
    три материала, точечную и сферическую камеры и источники света из config.
    Сцена возвращается уже инициализированной.
    """
    w = config['room_width']
    l = config['room_length']
    h = config['room_height']
    size = config['texture_size']

    scene = Scene()

    # Плоскости: нормали смотрят внутрь комнаты.
    # Закрытое ребро пола p4-p3 лежит на стыке с левой стеной x = -w/2
    floor_mat, wall_mat, side_mat = 0, 1, 2
    scene.add_object(Plane(floor_mat, [+w/2, 0, -l/2], [+w/2, 0, +l/2], [-w/2, 0, +l/2]))
    scene.add_object(Plane(side_mat, [-w/2, 0, +l/2], [-w/2, h, +l/2], [-w/2, h, -l/2]))
    scene.add_object(Plane(wall_mat, [+w/2, 0, +l/2], [+w/2, 0, -l/2], [+w/2, h, -l/2]))
    scene.add_object(Plane(wall_mat, [-w/2, 0, +l/2], [+w/2, 0, +l/2], [+w/2, h, +l/2]))
    scene.add_object(Plane(wall_mat, [-w/2, 0, -l/2], [-w/2, h, -l/2], [+w/2, h, -l/2]))

    # Материалы
    scene.add_material(_texture(config['floor_texture'], config['floor_texture_scale'],
                                checkerboard(size)))
    scene.add_material(_texture(config['wall_texture'], config['wall_texture_scale'],
                                dot_pattern(size)))
    scene.add_material(_texture(config['side_wall_texture'], config['wall_texture_scale'],
                                color_dot_pattern(size, seed=config['seed'])))

    # Камеры
    common = dict(
        position=config['camera_position'],
        direction=config['camera_direction'],
        up=config['camera_up'],
        n_aa=config['antialiasing'],
        t_range=config['t_range'],
        seed=config['seed'],
    )
    h_fov, v_fov = np.radians(config['pinhole_fov'])
    n_x, n_y = config['pinhole_resolution']
    scene.add_camera(PinholeCamera(h_fov=h_fov, v_fov=v_fov, n_x=n_x, n_y=n_y, **common))
    h_fov, v_fov = np.radians(config['spherical_fov'])
    n_x, n_y = config['spherical_resolution']
    scene.add_camera(SphericalCamera(h_fov=h_fov, v_fov=v_fov, n_x=n_x, n_y=n_y, **common))

    for light in config['lights']:
        scene.add_light(Light.from_dict(light))

    logger.info(f"[BoxWorld] Room {w}x{l}x{h}")
    scene.initialize()
    return scene


def circular_trajectory(n_step: int, radius: float, height: float):
    """
    Камера движется по окружности радиуса radius на высоте height,
    глядя по касательной.

    Возвращает: (positions, directions, ups), каждый массив (n_step, 3)
    """
    alpha = 2 * np.pi * np.linspace(0, 1, n_step)
    positions = np.stack([radius * np.cos(alpha),
                          np.full(n_step, float(height)),
                          radius * np.sin(alpha)], axis=1)
    directions = np.stack([-np.sin(alpha),
                           np.zeros(n_step),
                           np.cos(alpha)], axis=1)
    ups = np.tile([0.0, 1.0, 0.0], (n_step, 1))
    return positions, directions, ups
