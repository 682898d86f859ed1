"""Planar pose and velocity types shared by the controllers and the broadcaster."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

BODY_HEIGHT_MIN = 0.6
BODY_HEIGHT_MAX = 0.8


@dataclass
class Point:
    """A point or three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Quaternion:
    """An orientation quaternion; the default is the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass
class Pose:
    """A position together with an orientation."""

    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)


@dataclass
class Twist:
    """Linear and angular velocity."""

    linear: Point = field(default_factory=Point)
    angular: Point = field(default_factory=Point)


def yaw_from_quaternion(q: Quaternion) -> float:
    """Return the heading angle of a quaternion, in radians."""
    siny_cosp = 2.0 * (q.w * q.z - q.x * q.y)
    cosy_cosp = 1.0 - 2.0 * (q.y * q.y + q.z * q.z)
    return math.atan2(siny_cosp, cosy_cosp)


def find_body_pose(poses: Iterable[Pose]) -> Pose | None:
    """Return the first pose whose height lies strictly within the robot body's band."""
    return next(
        (
            pose
            for pose in poses
            if BODY_HEIGHT_MIN < pose.position.z < BODY_HEIGHT_MAX
        ),
        None,
    )