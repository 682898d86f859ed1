"""Proportional-derivative velocity control toward a point in the robot frame."""

from __future__ import annotations

from doggybot.geometry import Twist

KP_TRANSLATION = 0.3
KD_TRANSLATION = 0.001
KP_ROTATION = 0.5
KD_ROTATION = 0.005


def pid_control(
    px: float, py: float, past_px: float, past_py: float, dt: float
) -> Twist:
    """Return the velocity command for the current and previous target offsets."""
    twist = Twist()
    twist.linear.x = KP_TRANSLATION * px + KD_TRANSLATION * (px - past_px) / dt
    twist.angular.z = KP_ROTATION * py + KD_ROTATION * (py - past_py) / dt
    return twist