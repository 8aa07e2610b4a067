import numpy as np

from raytracer.SDL_Scene import parse_fragment
from raytracer.SDL_Scene.core.scene_nodes import Camera, Direction, Point


def axes(c2w):
    return c2w[:3, 0], c2w[:3, 1], c2w[:3, 2], c2w[:3, 3]


def test_camera_on_z_axis_is_not_rotated():
    c2w = Camera(origin=Point(0.0, 0.0, 5.0), look_at=Point.zero()).camera_to_world()
    assert np.allclose(c2w[:3, :3], np.eye(3))
    assert np.allclose(c2w[:3, 3], [0.0, 0.0, 5.0])
    assert np.allclose(c2w[3], [0.0, 0.0, 0.0, 1.0])


def test_camera_axes_for_side_view():
    c2w = Camera(origin=Point(5.0, 0.0, 0.0), look_at=Point.zero()).camera_to_world()
    x, y, z, origin = axes(c2w)
    assert np.allclose(x, [0.0, 0.0, -1.0])
    assert np.allclose(y, [0.0, 1.0, 0.0])
    assert np.allclose(z, [1.0, 0.0, 0.0])
    assert np.allclose(origin, [5.0, 0.0, 0.0])
    # the camera looks down its own -Z axis
    assert np.allclose(c2w @ [0.0, 0.0, -1.0, 0.0], [-1.0, 0.0, 0.0, 0.0])


def test_camera_axes_are_orthonormal():
    c2w = Camera(origin=Point(3.0, 4.0, -2.0), look_at=Point(0.0, 1.0, 0.0)).camera_to_world()
    assert np.allclose(c2w[:3, :3].T @ c2w[:3, :3], np.eye(3))
    assert np.isclose(np.linalg.det(c2w[:3, :3]), 1.0)


def test_parsed_camera_sees_its_target():
    camera = parse_fragment("camera { origin <0, 0, 5> look_at <0> }", "camera")
    c2w = camera.camera_to_world()
    # the target sits five units down the view axis
    assert np.allclose(c2w @ [0.0, 0.0, -5.0, 1.0], [0.0, 0.0, 0.0, 1.0])


def test_tuples_as_arrays():
    assert np.array_equal(Point(1.0, 2.0, 3.0).as_array(), [1.0, 2.0, 3.0])
    assert np.array_equal(Direction(0.0, -1.0, 0.0).as_array(), [0.0, -1.0, 0.0])
