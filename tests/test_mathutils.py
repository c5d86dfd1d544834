import math

import pytest

from tankduel import mathutils as mu


def _flat(matrix):
    return [value for row in matrix for value in row]


def test_lerp_endpoints():
    assert mu.lerp(3.0, 7.0, 0.0) == 3.0
    assert mu.lerp(3.0, 7.0, 1.0) == 7.0


def test_lerp_midpoint_is_average():
    assert mu.lerp(2.0, 6.0, 0.5) == (2.0 + 6.0) / 2


def test_radians_of_half_turn():
    assert math.isclose(mu.radians(180.0), math.pi, rel_tol=1e-6)


def test_degrees_radians_round_trip():
    for angle in (-90.0, 0.0, 45.0, 270.0):
        assert math.isclose(mu.degrees(mu.radians(angle)), angle, abs_tol=1e-4)


@pytest.mark.parametrize("a,b", [(10, 4), (8, 4), (1, 3), (0, 5)])
def test_upper_bound_is_ceiling(a, b):
    result = mu.upper_bound(a, b)
    assert result * b >= a
    assert (result - 1) * b < a


def test_upper_bound_zero_divisor():
    with pytest.raises(ZeroDivisionError):
        mu.upper_bound(3, 0)


def test_normalized_rgb_extremes():
    assert mu.normalized_rgb(255, 0, 255) == (1.0, 0.0, 1.0)


def test_normalized_rgb_out_of_range():
    with pytest.raises(ValueError):
        mu.normalized_rgb(256, 0, 0)


def test_axis_angle_zero_is_identity():
    assert mu.axis_angle(0.0, 0.0, 1.0, 0.0) == (1.0, 0.0, 0.0, 0.0)


def test_axis_angle_is_unit():
    q = mu.axis_angle(0.0, 1.0, 0.0, 73.0)
    assert math.isclose(sum(c * c for c in q), 1.0, rel_tol=1e-9)


def test_get_axis_angle_identity():
    assert mu.get_axis_angle((1.0, 0.0, 0.0, 0.0)) == (1.0, 0.0, 0.0, 0.0)


def test_get_axis_angle_recovers_axis():
    q = mu.axis_angle(0.0, 0.0, 1.0, 90.0)
    result = mu.get_axis_angle(q)
    assert list(result[:3]) == pytest.approx([0.0, 0.0, 1.0], abs=1e-6)
    assert result[3] == round(mu.degrees(math.acos(q[0])))


def test_get_axis_angle_with_precision():
    q = mu.axis_angle(0.0, 1.0, 0.0, 60.0)
    result = mu.get_axis_angle(q, 100)
    assert result[:3] == (0.0, 1.0, 0.0)


def test_bit_round_trip():
    value = mu.set_bit(0, 3)
    assert mu.is_bit_set(value, 3)
    assert not mu.is_bit_set(value, 2)
    assert mu.clear_bit(value, 3) == 0


def test_set_bit_keeps_other_bits():
    value = mu.set_bit(mu.set_bit(0, 1), 4)
    assert mu.is_bit_set(value, 1) and mu.is_bit_set(value, 4)
    assert mu.clear_bit(value, 4) == mu.set_bit(0, 1)


def test_format_vector_ints():
    assert mu.format_vector([1, 2]) == "[1 2]"


def test_format_vector_floats():
    assert mu.format_vector([0.5, 1.5, 2.0]) == "[0.5 1.5 2]"


def test_translate_moves_point():
    assert mu.transform_point(mu.translate2d(3.0, -2.0), (1.0, 1.0)) == (1.0 + 3.0, 1.0 - 2.0)


def test_rotate_quarter_turn():
    point = mu.transform_point(mu.rotate2d(math.pi / 2), (1.0, 0.0))
    assert list(point) == pytest.approx([0.0, 1.0], abs=1e-9)


def test_scale_point():
    assert mu.transform_point(mu.scale2d(2.0, 3.0), (1.5, 4.0)) == (1.5 * 2.0, 4.0 * 3.0)


def test_identity_is_neutral():
    m = mu.mat3_mul(mu.translate2d(2.0, 5.0), mu.rotate2d(0.3))
    assert _flat(mu.mat3_mul(mu.identity3(), m)) == pytest.approx(_flat(m), abs=1e-9)
    assert _flat(mu.mat3_mul(m, mu.identity3())) == pytest.approx(_flat(m), abs=1e-9)


def test_translations_compose():
    combined = mu.mat3_mul(mu.translate2d(1.0, 2.0), mu.translate2d(3.0, 4.0))
    assert _flat(combined) == pytest.approx([1.0, 0.0, 4.0, 0.0, 1.0, 6.0, 0.0, 0.0, 1.0], abs=1e-9)


def test_rotation_inverse():
    m = mu.mat3_mul(mu.rotate2d(0.7), mu.rotate2d(-0.7))
    assert _flat(m) == pytest.approx([1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0], abs=1e-9)


def test_translation_in_last_column():
    m = mu.mat3_mul(mu.translate2d(10.0, 20.0), mu.rotate2d(1.1))
    assert (m[0][2], m[1][2]) == (10.0, 20.0)