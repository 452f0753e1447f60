"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from boxworld.scene import Scene
from boxworld.geometry import Plane
from boxworld.texture import Texture2D
from boxworld.camera import PinholeCamera

WALL_COLOR = (0.2, 0.4, 0.6)
WALL_Z = 50.0


def solid_texture(color, size=2):
    return Texture2D(np.tile(np.array(color, dtype=np.float64), (size, size, 1)))


def facing_wall(z=WALL_Z, material_id=0):
    """Плоскость 200x200 в z = const, нормаль смотрит на камеру (-z)."""
    return Plane(material_id, [-100, 110, z], [-100, -90, z], [100, -90, z])


@pytest.fixture
def wall_scene():
    """Сцена из одной стены однотонного цвета, без света, инициализирована."""
    scene = Scene()
    scene.add_object(facing_wall())
    scene.add_material(solid_texture(WALL_COLOR))
    scene.initialize()
    return scene


@pytest.fixture
def make_pinhole():
    """Фабрика точечных камер 5x5 с углом обзора 60 градусов, смотрящих вдоль +z."""
    def _make(position=(0.0, 0.0, 0.0), direction=(0.0, 0.0, 1.0), **kwargs):
        params = dict(h_fov=np.radians(60), v_fov=np.radians(60), n_x=5, n_y=5)
        params.update(kwargs)
        return PinholeCamera(position, direction, (0.0, 1.0, 0.0), **params)
    return _make


@pytest.fixture
def small_config():
    """Конфигурация мира-коробки с маленьким разрешением."""
    from boxworld.config import load_config
    config = load_config()
    config.update({
        'pinhole_resolution': [21, 21],
        'spherical_resolution': [15, 5],
        'antialiasing': 1,
        'texture_size': 16,
    })
    return config
