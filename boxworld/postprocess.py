"""
Постобработка: приведение изображения и карты глубины к [0, 1], сохранение.
"""

import numpy as np
from PIL import Image

from .logger import logger


def to_display(image):
    """Делит изображение на его максимум; пустое изображение остаётся нулевым."""
    peak = np.max(image) if image.size else 0.0
    if peak <= 0:
        return np.zeros_like(image, dtype=np.float64)
    return np.clip(image / peak, 0.0, 1.0)


def depth_to_display(depth):
    """
    Карта глубины в оттенках серого: близко - светлее, далеко - темнее.
    Пиксели без попадания (глубина 0) - чёрные.
    """
    depth = np.abs(np.asarray(depth, dtype=np.float64))
    hit = depth > 0
    out = np.zeros_like(depth)
    if not np.any(hit):
        return out
    near, far = depth[hit].min(), depth[hit].max()
    span = far - near if far > near else 1.0
    out[hit] = 1.0 - 0.9 * (depth[hit] - near) / span
    return out


def save_png(filename, image):
    """Сохранение в формате PNG; image - RGB (h, w, 3) или серое (h, w) в [0, 1]."""
    image_8bit = (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)
    Image.fromarray(image_8bit).save(filename)
    logger.debug(f"[Postprocess] Saved {filename}")
