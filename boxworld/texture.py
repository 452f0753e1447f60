"""
Материалы: двумерные текстуры с повторением (tiling).
"""

from pathlib import Path

import numpy as np
from PIL import Image

from .logger import logger


class Texture2D:
    """
    Текстура RGB.

    Параметры:
        image: массив (n_y, n_x, 3|4) или (n_y, n_x); uint8 приводится к [0, 1]
        scale: сколько раз текстура укладывается на единицу координаты (u, v)
    """

    def __init__(self, image, scale: float = 1.0):
        img = np.asarray(image)
        if img.dtype == np.uint8:
            img = img.astype(np.float64) / 255.0
        else:
            img = img.astype(np.float64)
        if img.ndim == 2:
            img = np.repeat(img[:, :, None], 3, axis=2)
        if img.ndim != 3 or img.shape[2] < 3 or img.shape[0] == 0 or img.shape[1] == 0:
            raise ValueError(f"Texture2D: unsupported image shape {img.shape}")

        self.image = np.ascontiguousarray(img[:, :, :3])
        self.n_y, self.n_x = self.image.shape[:2]
        self.scale = float(scale)

    @classmethod
    def from_file(cls, path: str, scale: float = 1.0):
        """Загружает изображение через Pillow."""
        p = Path(path).expanduser().resolve()
        if not p.is_file():
            raise FileNotFoundError(f"Texture not found: {p}")
        with Image.open(p) as img:
            data = np.array(img.convert("RGB"), dtype=np.uint8)
        logger.debug(f"[Texture2D] Loaded texture {p} ({data.shape[1]}x{data.shape[0]})")
        return cls(data, scale)

    def lookup(self, u, v):
        """
        Цвет текселей для координат (u, v).
        Индексы берутся по модулю размера текстуры - текстура повторяется.
        """
        rows = np.mod(np.floor(self.scale * np.asarray(v) * self.n_y).astype(np.int64), self.n_y)
        cols = np.mod(np.floor(self.scale * np.asarray(u) * self.n_x).astype(np.int64), self.n_x)
        return self.image[rows, cols]


def checkerboard(size: int = 64, n_checks: int = 8,
                 dark=(0.1, 0.1, 0.1), light=(0.9, 0.9, 0.9)):
    """Шахматная доска size x size из n_checks x n_checks клеток."""
    idx = np.arange(size) * n_checks // size
    mask = (idx[:, None] + idx[None, :]) % 2 == 0
    return np.where(mask[:, :, None], np.array(light), np.array(dark))


def dot_pattern(size: int = 64, n_dots: int = 4, radius: float = 0.3,
                color=(0.2, 0.2, 0.2), background=(0.95, 0.95, 0.95)):
    """
    Кружки на однотонном фоне: n_dots x n_dots ячеек,
    radius - радиус кружка в долях ячейки.
    """
    cell = (np.arange(size) + 0.5) * n_dots / size
    fx = cell - np.floor(cell) - 0.5
    dist = np.sqrt(fx[:, None]**2 + fx[None, :]**2)
    mask = dist <= radius
    return np.where(mask[:, :, None], np.array(color), np.array(background))


def color_dot_pattern(size: int = 64, n_dots: int = 4, radius: float = 0.3,
                      background=(0.95, 0.95, 0.95), seed: int = 0):
    """Кружки случайных цветов: у каждой ячейки свой цвет."""
    rng = np.random.default_rng(seed)
    palette = rng.uniform(0.1, 0.9, size=(n_dots, n_dots, 3))

    cell = (np.arange(size) + 0.5) * n_dots / size
    fx = cell - np.floor(cell) - 0.5
    dist = np.sqrt(fx[:, None]**2 + fx[None, :]**2)
    cell_idx = np.floor(cell).astype(np.int64)
    colors = palette[cell_idx[:, None], cell_idx[None, :]]

    mask = dist <= radius
    return np.where(mask[:, :, None], colors, np.array(background))
