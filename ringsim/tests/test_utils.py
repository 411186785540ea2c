"""Tests for ring geometry helpers."""

from datetime import datetime
from ringsim.utils import (
    wrap_angle,
    shortest_angle_diff,
    angular_distance,
    step_toward,
    step_angle_toward,
    format_sim_time,
)


def test_wrap_angle():
    assert wrap_angle(370.0) == 10.0
    assert wrap_angle(-15.0) == 345.0
    assert wrap_angle(360.0) == 0.0
    assert 0.0 <= wrap_angle(-1e-18) < 360.0


def test_shortest_angle_diff_crosses_zero():
    assert shortest_angle_diff(350.0, 10.0) == 20.0
    assert shortest_angle_diff(10.0, 350.0) == -20.0
    assert shortest_angle_diff(0.0, 180.0) == 180.0


def test_angular_distance():
    assert angular_distance(355.0, 5.0) == 10.0
    assert angular_distance(90.0, 90.0) == 0.0


def test_step_toward_does_not_overshoot():
    assert step_toward(0.0, 1.5, 2.0) == 1.5
    assert step_toward(5.0, 0.0, 2.0) == 3.0
    assert step_toward(5.95, 6.0, 0.01, tolerance=0.1) == 6.0


def test_step_angle_toward_takes_short_arc():
    assert step_angle_toward(350.0, 10.0, 15.0, 1.0) == 5.0
    assert step_angle_toward(10.0, 350.0, 15.0, 1.0) == 355.0
    assert step_angle_toward(100.0, 100.5, 15.0, 1.0) == 100.5


def test_format_sim_time():
    assert format_sim_time(datetime(2025, 1, 6, 9, 30)) == "Mon 09:30"
