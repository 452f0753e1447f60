import numpy as np
import pytest

from boxworld.scene import Scene, GeometryStore, CapacityError, MaterialError, MAX_TRIANGLES
from boxworld.geometry import Plane, Triangle

from conftest import solid_texture, facing_wall


def plane_batch(plane):
    u, v = plane.get_texture_coordinates()
    normals, areas = plane.get_normals_areas()
    return plane.get_triangles(), normals, u, v, plane.get_centroids(), areas


def test_append_tracks_count_and_material():
    store = GeometryStore(capacity=10)
    idx = store.append(*plane_batch(facing_wall()), material_id=2)
    idx2 = store.append(*plane_batch(facing_wall(z=60)), material_id=5)
    assert len(store) == 4
    assert idx.tolist() == [0, 1]
    assert idx2.tolist() == [2, 3]
    assert store.material_ids[:4].tolist() == [2, 2, 5, 5]


def test_capacity_exceeded_fails_without_partial_write():
    store = GeometryStore(capacity=3)
    store.append(*plane_batch(facing_wall()), material_id=0)
    with pytest.raises(CapacityError):
        store.append(*plane_batch(facing_wall(z=60)), material_id=0)
    assert len(store) == 2
    assert np.isnan(store.vertices[2]).all()


def test_default_capacity():
    assert GeometryStore().capacity == MAX_TRIANGLES


def test_mismatched_batch_rejected():
    triangles, normals, u, v, centroids, areas = plane_batch(facing_wall())
    store = GeometryStore(capacity=10)
    with pytest.raises(ValueError):
        store.append(triangles, normals[:1], u, v, centroids, areas, material_id=0)
    assert len(store) == 0


def test_finalize_trims_and_freezes():
    store = GeometryStore(capacity=10)
    store.append(*plane_batch(facing_wall()), material_id=0)
    store.finalize()
    assert store.vertices.shape == (2, 3, 3)
    assert store.normals.shape == (2, 3)
    assert store.areas.shape == (2,)
    assert store.material_ids.shape == (2,)
    assert not store.vertices.flags.writeable
    with pytest.raises(ValueError):
        store.normals[0, 0] = 1.0
    with pytest.raises(RuntimeError):
        store.append(*plane_batch(facing_wall()), material_id=0)
    # Повторный вызов ничего не меняет
    store.finalize()
    assert len(store) == 2


def test_scene_returns_indices():
    scene = Scene()
    assert scene.add_object(facing_wall()) == 0
    assert scene.add_object(facing_wall(z=70)) == 1
    assert scene.add_material(solid_texture((1, 0, 0))) == 0
    assert len(scene.store) == 4


def test_scene_rejects_unknown_material_at_initialize():
    scene = Scene()
    scene.add_object(facing_wall(material_id=1))
    scene.add_material(solid_texture((1, 0, 0)))
    with pytest.raises(MaterialError):
        scene.initialize()


def test_scene_capacity_error_surfaces():
    scene = Scene(capacity=1)
    with pytest.raises(CapacityError):
        scene.add_object(facing_wall())
    assert scene.objects == []


def test_render_requires_initialize(make_pinhole):
    scene = Scene()
    scene.add_object(facing_wall())
    scene.add_material(solid_texture((1, 0, 0)))
    scene.add_camera(make_pinhole())
    with pytest.raises(RuntimeError):
        scene.render(0)


def test_camera_control_through_scene(make_pinhole):
    scene = Scene()
    cam_id = scene.add_camera(make_pinhole())
    scene.move_camera_to(cam_id, [1, 2, 3])
    scene.move_camera_by(cam_id, [1, 0, 0])
    np.testing.assert_allclose(scene.cameras[cam_id].position, [2, 2, 3])
    scene.orient_camera(cam_id, [1, 0, 0], [0, 1, 0])
    np.testing.assert_allclose(scene.cameras[cam_id].forward, [1, 0, 0], atol=1e-12)
    scene.rotate_camera(cam_id, [0, np.pi / 2, 0])
    np.testing.assert_allclose(scene.cameras[cam_id].forward, [0, 0, -1], atol=1e-12)


def test_overlapping_triangles_nearest_color(make_pinhole):
    scene = Scene()
    big = dict(v0=[-100, -100, 0], v1=[100, -100, 0], v2=[-100, 100, 0])
    far = {k: np.array(p, dtype=float) + [0, 0, 80] for k, p in big.items()}
    near = {k: np.array(p, dtype=float) + [0, 0, 40] for k, p in big.items()}
    scene.add_object(Triangle(0, **far))
    scene.add_object(Triangle(1, **near))
    scene.add_material(solid_texture((1.0, 0.0, 0.0)))
    scene.add_material(solid_texture((0.0, 1.0, 0.0)))
    scene.add_camera(make_pinhole(position=(-20.0, -20.0, 0.0)))
    scene.initialize()

    image, depth = scene.render(0)
    center = image[2, 2]
    np.testing.assert_allclose(center, [0.0, 1.0, 0.0])
    assert depth[2, 2] == pytest.approx(40.0)
