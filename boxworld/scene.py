"""
Сцена: хранение геометрии, материалов, источников света и камер.
"""

import numpy as np

from .logger import logger
from .renderer import render_frame

MAX_TRIANGLES = 100  # Вместимость хранилища по умолчанию.


class CapacityError(RuntimeError):
    """Треугольников больше, чем вмещает хранилище."""


class MaterialError(ValueError):
    """Треугольник ссылается на несуществующий материал."""


class GeometryStore:
    """
    Хранилище треугольников сцены (структура массивов).

    Хранит:
        vertices     (n, 3, 3) - вершины v0, v1, v2
        normals      (n, 3)    - единичные нормали
        tex_u, tex_v (n, 3)    - текстурные координаты вершин
        centroids    (n, 3)    - центроиды
        areas        (n,)      - удвоенные площади
        material_ids (n,)      - индексы материалов

    Массивы выделяются на capacity треугольников сразу; finalize() обрезает
    их до числа добавленных и делает доступными только для чтения.
    """

    def __init__(self, capacity: int = MAX_TRIANGLES):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.n_tri = 0
        self.finalized = False

        self.vertices = np.full((capacity, 3, 3), np.nan)
        self.normals = np.full((capacity, 3), np.nan)
        self.tex_u = np.full((capacity, 3), np.nan)
        self.tex_v = np.full((capacity, 3), np.nan)
        self.centroids = np.full((capacity, 3), np.nan)
        self.areas = np.full(capacity, np.nan)
        self.material_ids = np.full(capacity, -1, dtype=np.int64)

    def __len__(self):
        return self.n_tri

    def append(self, triangles, normals, tex_u, tex_v, centroids, areas, material_id):
        """
        Добавляет пачку треугольников одного объекта с общим материалом.
        Возвращает индексы добавленных треугольников.
        """
        if self.finalized:
            raise RuntimeError("GeometryStore is finalized, append is not allowed")

        triangles = np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 3)
        n = triangles.shape[0]
        batch = {
            'normals': (np.asarray(normals, dtype=np.float64), (n, 3)),
            'tex_u': (np.asarray(tex_u, dtype=np.float64), (n, 3)),
            'tex_v': (np.asarray(tex_v, dtype=np.float64), (n, 3)),
            'centroids': (np.asarray(centroids, dtype=np.float64), (n, 3)),
            'areas': (np.asarray(areas, dtype=np.float64), (n,)),
        }
        for name, (arr, shape) in batch.items():
            if arr.shape != shape:
                raise ValueError(f"{name}: expected shape {shape}, got {arr.shape}")

        if self.n_tri + n > self.capacity:
            raise CapacityError(
                f"Cannot add {n} triangles: {self.n_tri} of {self.capacity} already used"
            )

        index = slice(self.n_tri, self.n_tri + n)
        self.vertices[index] = triangles
        self.normals[index] = batch['normals'][0]
        self.tex_u[index] = batch['tex_u'][0]
        self.tex_v[index] = batch['tex_v'][0]
        self.centroids[index] = batch['centroids'][0]
        self.areas[index] = batch['areas'][0]
        self.material_ids[index] = int(material_id)
        self.n_tri += n
        return np.arange(index.start, index.stop)

    def finalize(self):
        """Обрезает массивы до числа треугольников и запрещает изменения."""
        if self.finalized:
            return
        n = self.n_tri
        for name in ('vertices', 'normals', 'tex_u', 'tex_v',
                     'centroids', 'areas', 'material_ids'):
            arr = getattr(self, name)[:n].copy()
            arr.flags.writeable = False
            setattr(self, name, arr)
        self.finalized = True


class Scene:
    """
    Контейнер для 3D сцены.

    Хранит:
        - Треугольники (GeometryStore)
        - Объекты, из которых они получены
        - Материалы (текстуры), источники света, камеры
    """

    def __init__(self, capacity: int = MAX_TRIANGLES):
        self.store = GeometryStore(capacity)
        self.objects = []
        self.materials = []
        self.lights = []
        self.cameras = []

    def add_object(self, obj):
        """
        Добавляет объект, умеющий отдавать треугольники
        (get_triangles, get_texture_coordinates, get_normals_areas, get_centroids).
        Возвращает индекс объекта.
        """
        u, v = obj.get_texture_coordinates()
        normals, areas = obj.get_normals_areas()
        self.store.append(
            obj.get_triangles(), normals, u, v,
            obj.get_centroids(), areas, obj.material_id
        )
        self.objects.append(obj)
        return len(self.objects) - 1

    def add_material(self, material):
        self.materials.append(material)
        return len(self.materials) - 1

    def add_light(self, light):
        self.lights.append(light)
        return len(self.lights) - 1

    def add_camera(self, camera):
        self.cameras.append(camera)
        return len(self.cameras) - 1

    def move_camera_to(self, camera_id, position):
        self.cameras[camera_id].move_to(position)

    def move_camera_by(self, camera_id, shift):
        self.cameras[camera_id].move_by(shift)

    def rotate_camera(self, camera_id, rotation):
        self.cameras[camera_id].rotate(rotation)

    def orient_camera(self, camera_id, direction, up):
        self.cameras[camera_id].orient(direction, up)

    def initialize(self):
        """
        Завершает построение сцены: фиксирует геометрию и проверяет,
        что каждый треугольник ссылается на существующий материал.
        """
        self.store.finalize()
        mat_ids = self.store.material_ids
        bad = (mat_ids < 0) | (mat_ids >= len(self.materials))
        if np.any(bad):
            raise MaterialError(
                f"Material indices {sorted(set(mat_ids[bad].tolist()))} are out of range, "
                f"{len(self.materials)} materials registered"
            )
        logger.info(f"[Scene] {len(self.store)} triangles, {len(self.materials)} materials, "
                    f"{len(self.lights)} lights, {len(self.cameras)} cameras")

    def render(self, camera_id):
        """
        Трассирует лучи из камеры camera_id.
        Возвращает (image (n_y, n_x, 3), depth (n_y, n_x)).
        """
        if not self.store.finalized:
            raise RuntimeError("Scene is not initialized, call initialize() first")
        return render_frame(self.store, self.materials, self.lights,
                            self.cameras[camera_id])
