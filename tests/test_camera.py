import numpy as np
import pytest

from boxworld.camera import PinholeCamera, SphericalCamera


def pinhole(**kwargs):
    params = dict(position=[0, 0, 0], direction=[0, 0, 1], up=[0, 1, 0],
                  h_fov=np.radians(90), v_fov=np.radians(90), n_x=3, n_y=3)
    params.update(kwargs)
    return PinholeCamera(**params)


def test_basis_is_orthonormal():
    cam = pinhole(up=[0, 1, 1])
    np.testing.assert_allclose(cam.up, [0, 1, 0], atol=1e-12)
    np.testing.assert_allclose(cam.right, np.cross(cam.forward, cam.up))
    np.testing.assert_allclose(cam.right, [-1, 0, 0], atol=1e-12)


def test_up_parallel_to_direction_rejected():
    with pytest.raises(ValueError):
        pinhole(up=[0, 0, 1])


def test_pinhole_screen_grid():
    cam = pinhole()
    xd, yd, zd = cam.screen(0)
    assert xd.shape == (3, 3)
    np.testing.assert_allclose(xd[0], [-1, 0, 1], atol=1e-12)
    # Строка 0 - верх
    np.testing.assert_allclose(yd[:, 0], [1, 0, -1], atol=1e-12)
    np.testing.assert_array_equal(zd, 1.0)
    assert cam.resolution == (3, 3)


def test_world_directions_follow_basis():
    cam = pinhole(direction=[1, 0, 0])
    dirs, zd = cam.directions(0)
    assert dirs.shape == (9, 3)
    np.testing.assert_allclose(dirs[4], [1, 0, 0], atol=1e-12)
    np.testing.assert_array_equal(zd, 1.0)


def test_single_sample_has_no_jitter():
    cam = pinhole(n_aa=1, seed=7)
    assert cam.n_aa == 1
    assert cam.aa_x.tolist() == [0.0]
    assert cam.aa_y.tolist() == [0.0]


def test_jitter_within_half_pixel_and_reproducible():
    cam = pinhole(n_aa=6, seed=3)
    pitch = cam.pixel_pitch()
    assert cam.n_aa == 6
    assert cam.aa_x[0] == 0.0 and cam.aa_y[0] == 0.0
    assert np.all(np.abs(cam.aa_x) <= pitch[0] / 2)
    assert np.all(np.abs(cam.aa_y) <= pitch[1] / 2)
    again = pinhole(n_aa=6, seed=3)
    np.testing.assert_array_equal(cam.aa_x, again.aa_x)


def test_explicit_offsets_override():
    cam = pinhole(aa_offsets=[(0.0, 0.0), (0.1, -0.1)])
    assert cam.n_aa == 2
    xd, yd, _ = cam.screen(1)
    np.testing.assert_allclose(xd[1, 1], 0.1)
    np.testing.assert_allclose(yd[1, 1], -0.1)


def test_invalid_sample_count():
    with pytest.raises(ValueError):
        pinhole(n_aa=0)


def test_homogeneous_position_accepted():
    cam = pinhole(position=[0, 20, -80, 0], t_range=[0, 10**3])
    np.testing.assert_array_equal(cam.position, [0, 20, -80])
    assert (cam.t0, cam.t1) == (0.0, 1000.0)


def test_rotate_about_y():
    cam = pinhole()
    cam.rotate([0, np.pi / 2, 0])
    np.testing.assert_allclose(cam.forward, [1, 0, 0], atol=1e-12)
    np.testing.assert_allclose(cam.up, [0, 1, 0], atol=1e-12)


def test_spherical_unit_directions():
    cam = SphericalCamera([0, 0, 0], [0, 0, 1], [0, 1, 0],
                          np.radians(180), np.radians(60), 5, 3)
    xd, yd, zd = cam.screen(0)
    np.testing.assert_allclose(xd**2 + yd**2 + zd**2, 1.0)
    # Центр смотрит вперёд, края по азимуту - вбок
    np.testing.assert_allclose([xd[1, 2], yd[1, 2], zd[1, 2]], [0, 0, 1], atol=1e-12)
    np.testing.assert_allclose([xd[1, 4], zd[1, 4]], [1, 0], atol=1e-12)
    assert yd[0, 2] > 0


def test_single_pixel_looks_forward():
    cam = pinhole(n_x=1, n_y=1, direction=[1, 0, 0])
    dirs, zd = cam.directions(0)
    np.testing.assert_allclose(dirs, [[1, 0, 0]], atol=1e-12)
    np.testing.assert_array_equal(zd, 1.0)


def test_single_row_lies_on_optical_axis():
    cam = pinhole(n_x=3, n_y=1)
    xd, yd, _ = cam.screen(0)
    np.testing.assert_allclose(xd[0], [-1, 0, 1], atol=1e-12)
    np.testing.assert_array_equal(yd, 0.0)


def test_spherical_single_pixel_looks_forward():
    cam = SphericalCamera([0, 0, 0], [0, 0, 1], [0, 1, 0],
                          np.radians(180), np.radians(60), 1, 1)
    dirs, zd = cam.directions(0)
    np.testing.assert_allclose(dirs, [[0, 0, 1]], atol=1e-12)
    np.testing.assert_allclose(zd, 1.0)
