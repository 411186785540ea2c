"""Utility functions for ring geometry and formatting."""

from datetime import datetime


def wrap_angle(angle: float) -> float:
    """
    Wrap an angle into [0, 360).

    Examples:
        >>> wrap_angle(370.0)
        10.0
        >>> wrap_angle(-15.0)
        345.0
    """
    wrapped = angle % 360.0
    # float modulo of a tiny negative number rounds up to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def shortest_angle_diff(current: float, target: float) -> float:
    """
    Signed difference from ``current`` to ``target`` along the shorter arc.

    Returns:
        Value in (-180, 180]; positive means counter-clockwise (increasing angle)

    Examples:
        >>> shortest_angle_diff(350.0, 10.0)
        20.0
        >>> shortest_angle_diff(10.0, 350.0)
        -20.0
    """
    diff = (target - current) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def angular_distance(a: float, b: float) -> float:
    """Unsigned shortest-arc distance between two angles, in [0, 180]."""
    return abs(shortest_angle_diff(a, b))


def step_toward(current: float, target: float, max_step: float, tolerance: float = 0.0) -> float:
    """
    Move ``current`` toward ``target`` by at most ``max_step`` without overshooting.

    Args:
        current: Current value
        target: Target value
        max_step: Largest allowed change (non-negative)
        tolerance: Within this distance the value snaps to the target

    Returns:
        Next value
    """
    diff = target - current
    if abs(diff) <= tolerance:
        return target
    step = min(abs(diff), max_step)
    return current + step if diff > 0 else current - step


def step_angle_toward(current: float, target: float, max_step: float, tolerance: float) -> float:
    """Angular version of ``step_toward`` taking the shorter arc, wrapped into [0, 360)."""
    diff = shortest_angle_diff(current, target)
    if abs(diff) <= tolerance:
        return target
    step = min(abs(diff), max_step)
    return wrap_angle(current + step if diff > 0 else current - step)


def format_sim_time(moment: datetime) -> str:
    """
    Format a simulation timestamp for log lines.

    Examples:
        >>> format_sim_time(datetime(2025, 1, 6, 9, 30))
        'Mon 09:30'
    """
    return moment.strftime("%a %H:%M")
