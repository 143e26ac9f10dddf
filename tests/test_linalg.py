import numpy as np
import pytest

from vanishcam.core.linalg import (
    cross,
    inverse,
    multiply,
    normalize,
    rotation_3d,
    transform_vector,
    transpose,
    vec_add,
    vec_scale,
    vec_sub,
)


def test_inverse_roundtrip_random_matrices():
    rng = np.random.default_rng(0)
    for n in (2, 3, 4, 6):
        m = rng.normal(size=(n, n)) + n * np.eye(n)
        inv = inverse(m)
        assert inv is not None
        assert np.max(np.abs(multiply(m, inv) - np.eye(n))) < 1e-10
        assert np.max(np.abs(inverse(inv) - m)) < 1e-9


def test_inverse_swaps_rows_on_zero_pivot():
    m = np.array([[0.0, 2.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 4.0]])
    inv = inverse(m)
    assert inv is not None
    assert np.allclose(inv @ m, np.eye(3))


def test_inverse_rejects_singular_and_non_square():
    assert inverse(np.array([[1.0, 2.0], [2.0, 4.0]])) is None
    assert inverse(np.zeros((3, 3))) is None
    assert inverse(np.ones((2, 3))) is None


def test_inverse_leaves_input_untouched():
    m = np.array([[0.0, 1.0], [3.0, 2.0]])
    before = m.copy()
    inverse(m)
    assert np.array_equal(m, before)


def test_multiply_checks_shapes():
    with pytest.raises(ValueError):
        multiply(np.ones((2, 3)), np.ones((2, 3)))
    assert multiply(np.ones((2, 3)), np.ones((3, 4))).shape == (2, 4)
    assert transpose(np.ones((2, 3))).shape == (3, 2)


def test_rotation_3d_is_proper_orthonormal():
    for axis in (0, 1, 2):
        for theta in (-2.5, -0.3, 0.0, 0.7, 3.1, 10.0):
            r = rotation_3d(axis, theta)
            assert np.max(np.abs(transpose(r) - inverse(r))) < 1e-12
            assert abs(np.linalg.det(r) - 1.0) < 1e-12
            assert r[axis, axis] == 1.0


def test_rotation_3d_right_handed():
    # +90 deg about z takes x to y, about x takes y to z, about y takes z to x.
    assert np.allclose(rotation_3d(2, np.pi / 2) @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
    assert np.allclose(rotation_3d(0, np.pi / 2) @ [0.0, 1.0, 0.0], [0.0, 0.0, 1.0])
    assert np.allclose(rotation_3d(1, np.pi / 2) @ [0.0, 0.0, 1.0], [1.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        rotation_3d(3, 0.1)


def test_vector_ops_pad_and_ignore_nan():
    assert np.array_equal(vec_add([1.0, 2.0], [1.0, 2.0, 3.0]), [2.0, 4.0, 3.0])
    assert np.array_equal(vec_sub([1.0, np.nan], [0.5]), [0.5, 0.0])
    assert np.array_equal(vec_scale([1.0, -2.0], 3.0), [3.0, -6.0])


def test_transform_vector_uses_leading_components():
    m = np.arange(9, dtype=np.float64).reshape(3, 3)
    assert np.array_equal(transform_vector(m, [1.0, 1.0]), [1.0, 7.0, 13.0])
    assert np.array_equal(transform_vector(m[:2], [1.0, 0.0, 0.0, 5.0]), [0.0, 3.0])


def test_normalize_and_cross():
    assert np.allclose(normalize([3.0, 4.0]), [0.6, 0.8])
    with pytest.raises(ValueError):
        normalize([0.0, 0.0, 0.0])
    assert np.array_equal(cross([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]), [0.0, 0.0, 1.0])
    a = np.array([0.3, -1.2, 2.0])
    b = np.array([1.5, 0.4, -0.7])
    assert np.allclose(cross(a, b), np.cross(a, b))
    with pytest.raises(ValueError):
        cross([1.0, 0.0], [0.0, 1.0])
