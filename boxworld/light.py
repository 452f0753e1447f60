"""
Точечный источник света для модели Фонга.
"""

import numpy as np


class Light:
    """
    Источник света.

    Параметры:
        position: позиция источника
        diffuse: коэффициенты диффузного отражения (RGB)
        specular: коэффициенты зеркального отражения (RGB)
        color: цвет источника (RGB)
        phong_exp: показатель Фонга (степень для N·H)
    """

    def __init__(self, position, diffuse=(1.0, 1.0, 1.0), specular=(0.0, 0.0, 0.0),
                 color=(1.0, 1.0, 1.0), phong_exp: float = 1.0):
        self.position = np.array(position, dtype=np.float64)[:3]
        self.diffuse = np.array(diffuse, dtype=np.float64)
        self.specular = np.array(specular, dtype=np.float64)
        self.color = np.array(color, dtype=np.float64)
        self.phong_exp = float(phong_exp)

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            position=data['position'],
            diffuse=data.get('diffuse', (1.0, 1.0, 1.0)),
            specular=data.get('specular', (0.0, 0.0, 0.0)),
            color=data.get('color', (1.0, 1.0, 1.0)),
            phong_exp=data.get('phong_exp', 1.0),
        )
