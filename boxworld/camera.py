"""
Камеры: точечная (pinhole) и сферическая.

Камера отдаёт для каждого пикселя компоненты направления луча в своём
базисе (xd, yd, zd); в мире луч идёт вдоль xd*right + yd*up + zd*forward,
а zd служит множителем глубины вдоль оптической оси.
"""

import numpy as np
from .math_utils import normalize, cross


def _screen_axis(start, stop, n):
    """Координаты центров n пикселей от start до stop; один пиксель - на оси."""
    if n == 1:
        return np.zeros(1)
    return np.linspace(start, stop, n)


def _rotation_matrix(rx, ry, rz):
    """Поворот вокруг осей x, затем y, затем z (углы в радианах)."""
    cx, sx = np.cos(rx), np.sin(rx)
    cy, sy = np.cos(ry), np.sin(ry)
    cz, sz = np.cos(rz), np.sin(rz)
    rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    rot_z = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return rot_z @ rot_y @ rot_x


class Camera:
    """
    Базовая камера.

    Параметры:
        position: позиция камеры в пространстве
        direction: направление взгляда
        up: вектор "вверх"
        h_fov, v_fov: углы обзора по горизонтали и вертикали (радианы)
        n_x, n_y: размер изображения в пикселях
        n_aa: число сэмплов на пиксель для антиалиасинга
        t_range: допустимый диапазон параметра луча (t0, t1)
        seed: зерно генератора смещений антиалиасинга
        aa_offsets: явные смещения [(dx, dy), ...], заменяют случайные
    """

    def __init__(self, position, direction, up, h_fov, v_fov, n_x, n_y,
                 n_aa=1, t_range=(0.0, 1000.0), seed=0, aa_offsets=None):
        self.h_fov = float(h_fov)
        self.v_fov = float(v_fov)
        self.n_x = int(n_x)
        self.n_y = int(n_y)
        self.t0, self.t1 = float(t_range[0]), float(t_range[1])
        if self.n_x < 1 or self.n_y < 1:
            raise ValueError(f"Resolution must be positive, got {self.n_x}x{self.n_y}")

        self.move_to(position)
        self.orient(direction, up)

        if aa_offsets is None:
            if n_aa < 1:
                raise ValueError(f"n_aa must be >= 1, got {n_aa}")
            # Первый сэмпл - центр пикселя, остальные - в пределах полупикселя
            rng = np.random.default_rng(seed)
            jitter = rng.uniform(-0.5, 0.5, size=(int(n_aa), 2))
            jitter[0] = 0.0
            jitter *= self.pixel_pitch()
        else:
            jitter = np.array(aa_offsets, dtype=np.float64).reshape(-1, 2)
            if jitter.shape[0] < 1:
                raise ValueError("aa_offsets must contain at least one offset")
        self.n_aa = jitter.shape[0]
        self.aa_x = jitter[:, 0]
        self.aa_y = jitter[:, 1]

    @property
    def resolution(self):
        return self.n_y, self.n_x

    def pixel_pitch(self):
        """Шаг между соседними пикселями по x и y."""
        raise NotImplementedError

    def screen(self, i_aa=0):
        """Компоненты направлений лучей (xd, yd, zd), каждая (n_y, n_x)."""
        raise NotImplementedError

    def move_to(self, position):
        self.position = np.array(position, dtype=np.float64)[:3]

    def move_by(self, shift):
        self.position = self.position + np.array(shift, dtype=np.float64)[:3]

    def orient(self, direction, up):
        """Задаёт направление взгляда; up ортогонализуется к нему."""
        forward = normalize(np.array(direction, dtype=np.float64)[:3])
        up_vec = np.array(up, dtype=np.float64)[:3]
        up_vec = up_vec - np.dot(up_vec, forward) * forward
        if np.linalg.norm(up_vec) < 1e-12:
            raise ValueError("up vector must not be parallel to the view direction")
        self.forward = forward
        self.up = normalize(up_vec)
        self.right = cross(self.forward, self.up)

    def rotate(self, rotation):
        """Поворачивает базис камеры на углы (rx, ry, rz) вокруг мировых осей."""
        rot = _rotation_matrix(*rotation[:3])
        self.orient(rot @ self.forward, rot @ self.up)

    def directions(self, i_aa=0):
        """
        Направления лучей в мировых координатах (n_y * n_x, 3)
        и множитель глубины zd (n_y * n_x,).
        """
        xd, yd, zd = (s.ravel() for s in self.screen(i_aa))
        dirs = (np.outer(xd, self.right)
                + np.outer(yd, self.up)
                + np.outer(zd, self.forward))
        return dirs, zd


class PinholeCamera(Camera):
    """Точечная камера: экран - плоскость на единичном расстоянии."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        half_w = np.tan(self.h_fov / 2)
        half_h = np.tan(self.v_fov / 2)
        # Строка 0 - верх изображения
        self.screen_x, self.screen_y = np.meshgrid(
            _screen_axis(-half_w, half_w, self.n_x),
            _screen_axis(half_h, -half_h, self.n_y),
        )
        self.screen_z = np.ones_like(self.screen_x)

    def pixel_pitch(self):
        return np.array([
            2 * np.tan(self.h_fov / 2) / max(self.n_x - 1, 1),
            2 * np.tan(self.v_fov / 2) / max(self.n_y - 1, 1),
        ])

    def screen(self, i_aa=0):
        return (self.screen_x + self.aa_x[i_aa],
                self.screen_y + self.aa_y[i_aa],
                self.screen_z)


class SphericalCamera(Camera):
    """
    Сферическая камера: пиксели равномерно распределены по азимуту
    и углу места, лучи единичной длины.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.azimuth, self.elevation = np.meshgrid(
            _screen_axis(-self.h_fov / 2, self.h_fov / 2, self.n_x),
            _screen_axis(self.v_fov / 2, -self.v_fov / 2, self.n_y),
        )

    def pixel_pitch(self):
        return np.array([
            self.h_fov / max(self.n_x - 1, 1),
            self.v_fov / max(self.n_y - 1, 1),
        ])

    def screen(self, i_aa=0):
        # Смещение антиалиасинга задаётся в углах
        az = self.azimuth + self.aa_x[i_aa]
        el = self.elevation + self.aa_y[i_aa]
        return (np.sin(az) * np.cos(el),
                np.sin(el),
                np.cos(az) * np.cos(el))
