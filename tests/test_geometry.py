"""Tests for 2D geometry helpers."""

import math

import numpy as np
import pytest

from mapvalidator.geometry import (
    GeometryError,
    bounding_box_2d,
    box_contains,
    cosine_of_angle,
    direction_2d,
    midpoint_2d,
    sine_of_angle,
)


class TestMidpointAndDirection:
    def test_midpoint_uses_first_and_last_point(self):
        points = np.array([[0.0, 0.0, 0.0], [100.0, 100.0, 0.0], [10.0, 4.0, 3.0]])

        np.testing.assert_allclose(midpoint_2d(points), [5.0, 2.0])

    def test_direction(self):
        points = np.array([[1.0, 1.0, 0.0], [4.0, 5.0, 9.0]])

        np.testing.assert_allclose(direction_2d(points), [3.0, 4.0])

    def test_too_few_points(self):
        with pytest.raises(GeometryError) as exc_info:
            midpoint_2d(np.array([[1.0, 2.0, 3.0]]), 42)

        assert exc_info.value.primitive_id == 42
        assert "at least two points" in str(exc_info.value)


class TestAngles:
    def test_sine_sign_follows_rotation(self):
        east = np.array([1.0, 0.0])
        north = np.array([0.0, 1.0])

        assert sine_of_angle(east, north) == pytest.approx(1.0)
        assert sine_of_angle(north, east) == pytest.approx(-1.0)

    def test_sine_is_scale_free(self):
        a = np.array([3.0, 0.0])
        b = np.array([10.0, 10.0])

        assert sine_of_angle(a, b) == pytest.approx(math.sqrt(0.5))

    def test_cosine(self):
        assert cosine_of_angle(np.array([1.0, 0.0]), np.array([-2.0, 0.0])) == pytest.approx(-1.0)

    @pytest.mark.parametrize("func", [sine_of_angle, cosine_of_angle])
    def test_zero_vector_raises(self, func):
        with pytest.raises(GeometryError):
            func(np.array([0.0, 0.0]), np.array([1.0, 0.0]), 7)


class TestBoundingBox:
    def test_contains(self):
        box = bounding_box_2d(np.array([[0.0, 0.0, 0.0], [10.0, 5.0, 0.0]]))

        assert box_contains(box, np.array([5.0, 5.0, 100.0]))
        assert not box_contains(box, np.array([11.0, 1.0, 0.0]))
