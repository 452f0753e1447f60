"""
Конфигурация мира-коробки и рендера.
Значения по умолчанию можно переопределить JSON-файлом.
"""

import copy
import json
from pathlib import Path

from .logger import logger

DEFAULT_CONFIG = {
    # --- Комната (см) ---
    'room_width': 200.0,
    'room_length': 200.0,
    'room_height': 150.0,

    # --- Текстуры: None - процедурные, иначе путь к файлу ---
    'floor_texture': None,
    'wall_texture': None,
    'side_wall_texture': None,
    'floor_texture_scale': 3.0,
    'wall_texture_scale': 2.0,
    'texture_size': 64,

    # --- Камеры ---
    'camera_position': [0.0, 20.0, -80.0],
    'camera_direction': [0.0, 0.0, 1.0],
    'camera_up': [0.0, 1.0, 0.0],
    'pinhole_fov': [80.0, 80.0],       # горизонталь, вертикаль (градусы)
    'pinhole_resolution': [50, 50],    # n_x, n_y
    'spherical_fov': [240.0, 80.0],
    'spherical_resolution': [75, 25],
    'antialiasing': 5,                 # сэмплов на пиксель
    't_range': [0.0, 1000.0],
    'seed': 0,

    # --- Источники света: список словарей ---
    # {"position": [...], "diffuse": [...], "specular": [...],
    #  "color": [...], "phong_exp": ...}
    'lights': [],

    # --- Траектория ---
    'camera_id': 1,                    # 0 - pinhole, 1 - spherical
    'n_step': 45,
    'radius': 75.0,
    'camera_height': 20.0,

    # --- Вывод ---
    'output_dir': 'frames',
}


def load_config(path=None) -> dict:
    """
    Загружает конфигурацию: значения из JSON поверх DEFAULT_CONFIG.
    Если файл не найден - используются значения по умолчанию.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return config

    p = Path(path).expanduser()
    if not p.is_file():
        logger.warning(f"[Config] {p} not found, using defaults.")
        return config

    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"[Config] {p}: top-level JSON object expected")

    unknown = sorted(set(data) - set(DEFAULT_CONFIG))
    if unknown:
        logger.warning(f"[Config] Unknown keys ignored: {', '.join(unknown)}")
    config.update({k: v for k, v in data.items() if k in DEFAULT_CONFIG})
    logger.info(f"[Config] Loaded configuration from {p}.")
    return config
