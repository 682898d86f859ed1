"""Pure-pursuit style steering toward a point in the robot frame."""

from __future__ import annotations

from doggybot.geometry import Twist

TURN_THRESHOLD = 0.1
TURN_GAIN = 1.5
LINEAR_GAIN = 0.3


def pure_pursuit(px: float, py: float) -> Twist:
    """Turn in place when the heading error is large, otherwise drive forward."""
    twist = Twist()
    if py >= TURN_THRESHOLD or py <= -TURN_THRESHOLD:
        twist.angular.z = TURN_GAIN * py
    else:
        twist.linear.x = LINEAR_GAIN * px
        twist.angular.z = py
    return twist