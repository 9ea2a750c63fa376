import math

import pytest

from streamstart.mat import Axis, Transform, Vec3, cross


def assert_matrix_close(actual, expected, tol=1e-6):
    for row_a, row_e in zip(actual, expected):
        for a, e in zip(row_a, row_e):
            assert abs(a - e) < tol, (actual, expected)


IDENTITY = [[1.0 if r == c else 0.0 for c in range(4)] for r in range(4)]


def test_cross():
    result = cross(Vec3(1.0, 2.0, 3.0), Vec3(4.0, 5.0, 6.0))
    for expected, calculated in zip([-3.0, 6.0, -3.0], result):
        assert abs(expected - calculated) < 0.001


def test_simple_mul():
    a = Transform(
        [
            [1.0, 2.0, 3.0, 4.0],
            [5.0, 6.0, 7.0, 8.0],
            [9.0, 0.0, 1.0, 2.0],
            [3.0, 4.0, 5.0, 6.0],
        ]
    )
    b = Transform(
        [
            [2.0, 3.0, 4.0, 5.0],
            [6.0, 7.0, 8.0, 9.0],
            [10.0, 1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0, 7.0],
        ]
    )
    expected = [
        [60.0, 40.0, 50.0, 60.0],
        [148.0, 104.0, 130.0, 156.0],
        [36.0, 38.0, 50.0, 62.0],
        [104.0, 72.0, 90.0, 108.0],
    ]
    assert_matrix_close((a * b).arr, expected, tol=0.001)


def test_vec3_length_and_normalized():
    v = Vec3(3.0, 4.0, 0.0)
    assert v.length() == pytest.approx(5.0)
    n = v.normalized()
    assert (n.x, n.y, n.z) == pytest.approx((0.6, 0.8, 0.0))
    assert n.length() == pytest.approx(1.0)


def test_vec3_normalized_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Vec3(0.0, 0.0, 0.0).normalized()


def test_vec3_sub():
    assert Vec3(5.0, 7.0, 9.0) - Vec3(1.0, 2.0, 3.0) == Vec3(4.0, 5.0, 6.0)


def test_zeros_and_identity():
    assert Transform.zeros().arr == [[0.0] * 4 for _ in range(4)]
    assert Transform.identity().arr == IDENTITY


def test_scale():
    t = Transform.scale(2.0, 3.0, 4.0)
    assert t.arr == [
        [2.0, 0.0, 0.0, 0.0],
        [0.0, 3.0, 0.0, 0.0],
        [0.0, 0.0, 4.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def test_from_translation():
    t = Transform.from_translation(1.0, 2.0, 3.0)
    assert [row[3] for row in t.arr] == [1.0, 2.0, 3.0, 1.0]
    assert t.arr[0][0] == 1.0 and t.arr[1][1] == 1.0 and t.arr[2][2] == 1.0


def test_from_axis_angle_z():
    t = Transform.from_axis_angle(math.pi / 2, Axis.Z)
    assert_matrix_close(
        t.arr,
        [
            [0.0, -1.0, 0.0, 0.0],
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
    )


def test_from_axis_angle_x_and_y():
    tx = Transform.from_axis_angle(math.pi / 2, Axis.X)
    assert tx.arr[1][2] == pytest.approx(-1.0)
    assert tx.arr[2][1] == pytest.approx(1.0)
    ty = Transform.from_axis_angle(math.pi / 2, Axis.Y)
    assert ty.arr[0][2] == pytest.approx(-1.0)
    assert ty.arr[2][0] == pytest.approx(1.0)


def test_inverted_translation():
    inv = Transform.from_translation(1.0, -2.0, 3.0).inverted()
    assert_matrix_close(inv.arr, Transform.from_translation(-1.0, 2.0, -3.0).arr)


def test_inverted_scale():
    inv = Transform.scale(2.0, 4.0, 0.5).inverted()
    assert_matrix_close(inv.arr, Transform.scale(0.5, 0.25, 2.0).arr)


def test_inverted_times_original_is_identity():
    m = Transform(
        [
            [2.0, 0.0, 1.0, 3.0],
            [1.0, 3.0, 0.0, -1.0],
            [0.0, 1.0, 4.0, 2.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    assert_matrix_close((m * m.inverted()).arr, IDENTITY)
    assert_matrix_close((m.inverted() * m).arr, IDENTITY)


def test_inverted_singular_raises():
    with pytest.raises(ValueError):
        Transform.zeros().inverted()


def test_perspective():
    t = Transform.perspective(math.pi / 2, 1.0, 3.0)
    assert_matrix_close(
        t.arr,
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 2.0, -3.0],
            [0.0, 0.0, 1.0, 0.0],
        ],
    )


def test_look_at_down_z_is_identity():
    t = Transform.look_at(
        Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), Vec3(0.0, 1.0, 0.0)
    )
    assert_matrix_close(t.arr, IDENTITY)


def test_look_at_places_eye_in_translation_column():
    t = Transform.look_at(
        Vec3(1.0, 2.0, 3.0), Vec3(1.0, 2.0, 10.0), Vec3(0.0, 1.0, 0.0)
    )
    assert_matrix_close(t.arr, Transform.from_translation(1.0, 2.0, 3.0).arr)


def test_look_at_axes_are_orthonormal():
    t = Transform.look_at(
        Vec3(0.6, 0.2, -0.05), Vec3(0.16, 0.045, 0.0), Vec3(0.0, 1.0, 0.0)
    )
    cols = [Vec3(t.arr[0][c], t.arr[1][c], t.arr[2][c]) for c in range(3)]
    for c in cols:
        assert c.length() == pytest.approx(1.0)
    for i in range(3):
        for j in range(i + 1, 3):
            dot = sum(a * b for a, b in zip(cols[i], cols[j]))
            assert dot == pytest.approx(0.0, abs=1e-9)


def test_mul_with_identity_unchanged():
    m = Transform.from_translation(4.0, 5.0, 6.0) * Transform.scale(2.0, 2.0, 2.0)
    assert_matrix_close((m * Transform.identity()).arr, m.arr)
    assert m.arr[0][0] == pytest.approx(2.0)
    assert m.arr[0][3] == pytest.approx(4.0)