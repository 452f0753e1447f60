"""
BoxWorld - трассировка лучей для статической сцены из треугольников.
Даёт изображение и карту глубины для движущейся камеры.
"""

from .logger import logger
from .scene import Scene, GeometryStore, CapacityError, MaterialError, MAX_TRIANGLES
from .geometry import Plane, Triangle, intersect_scene, ray_triangle_intersect
from .camera import PinholeCamera, SphericalCamera
from .texture import Texture2D
from .light import Light
from .renderer import render_frame
from .box_world import create_box_world, circular_trajectory
from .config import DEFAULT_CONFIG, load_config

__version__ = "1.0.0"

__all__ = [
    "Scene",
    "GeometryStore",
    "CapacityError",
    "MaterialError",
    "MAX_TRIANGLES",
    "Plane",
    "Triangle",
    "intersect_scene",
    "ray_triangle_intersect",
    "PinholeCamera",
    "SphericalCamera",
    "Texture2D",
    "Light",
    "render_frame",
    "create_box_world",
    "circular_trajectory",
    "DEFAULT_CONFIG",
    "load_config",
]
