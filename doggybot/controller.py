"""Goal-seeking velocity controller for the robot base."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Iterable

from doggybot.geometry import Point, Pose, Twist, find_body_pose, yaw_from_quaternion
from doggybot.mpc import MPCController
from doggybot.pid import pid_control
from doggybot.pp import pure_pursuit

GOAL_TOLERANCE = 0.3
SEARCH_ANGULAR_SPEED = 0.2

GROUND_HEIGHT = -0.3
FOLLOW_TURN_THRESHOLD = 0.7
FOLLOW_TURN_GAIN = 0.2
FOLLOW_LINEAR_GAIN = 0.3
FOLLOW_ANGULAR_GAIN = 0.05


class Mode(enum.Enum):
    """The control law used to chase the goal."""

    MPC = "MPC"
    PP = "PP"
    PID = "PID"


def goal_in_robot_frame(goal: Twist, robot: Twist) -> tuple[float, float]:
    """Express the goal position in the robot's frame.

    Both arguments hold a planar pose: position in ``linear.x``/``linear.y``
    and heading in ``angular.z``.
    """
    theta = robot.angular.z
    dx = goal.linear.x - robot.linear.x
    dy = goal.linear.y - robot.linear.y
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return cos_t * dx + sin_t * dy, cos_t * dy - sin_t * dx


def follow_point(points: Iterable[Point]) -> Twist | None:
    """Steer toward the first finite point above the ground, if any."""
    for point in points:
        if not all(math.isfinite(c) for c in (point.x, point.y, point.z)):
            continue
        if point.z < GROUND_HEIGHT:
            continue
        if point.z > GROUND_HEIGHT:
            twist = Twist()
            if abs(point.y) >= FOLLOW_TURN_THRESHOLD:
                twist.angular.z = FOLLOW_TURN_GAIN * point.y
            else:
                twist.linear.x = FOLLOW_LINEAR_GAIN * point.x
                twist.angular.z = FOLLOW_ANGULAR_GAIN * point.y
            return twist
    return None


class Controller:
    """Tracks goal and robot poses and produces velocity commands."""

    def __init__(
        self,
        mode: Mode | str,
        publish: Callable[[Twist], None] | None = None,
    ) -> None:
        if isinstance(mode, str):
            try:
                mode = Mode(mode)
            except ValueError:
                raise ValueError(f"unknown control mode: {mode!r}") from None
        self.mode = mode
        self.publish = publish
        self.goal_pos = Twist()
        self.robot_pos = Twist()
        self.past_x = 0.0
        self.past_y = 0.0
        self.start_time = 0.0

    def goal_pose_callback(self, pose: Pose) -> None:
        """Store a new goal pose."""
        self.goal_pos.linear.x = pose.position.x
        self.goal_pos.linear.y = pose.position.y
        self.goal_pos.angular.z = yaw_from_quaternion(pose.orientation)

    def robot_pose_callback(self, poses: Iterable[Pose]) -> None:
        """Update the robot pose from the first pose at body height."""
        body = find_body_pose(poses)
        if body is None:
            return
        self.robot_pos.linear.x = body.position.x
        self.robot_pos.linear.y = body.position.y
        self.robot_pos.angular.z = yaw_from_quaternion(body.orientation)

    def callback(self, now: float) -> Twist | None:
        """Compute, publish and return a command; None once the goal is reached.

        ``now`` is a monotonic time in seconds; the step is measured from the
        previous call.
        """
        dt = now - self.start_time
        px, py = goal_in_robot_frame(self.goal_pos, self.robot_pos)
        command = None
        if math.hypot(px, py) > GOAL_TOLERANCE:
            command = self.controller_mode(px, py, self.past_x, self.past_y, dt)
            self.past_x = px
            self.past_y = py
            if self.publish is not None:
                self.publish(command)
        self.start_time = now
        return command

    def controller_mode(
        self, px: float, py: float, past_px: float, past_py: float, dt: float
    ) -> Twist:
        """Apply the configured control law to a target in the robot frame."""
        if self.mode is Mode.MPC:
            if px > 0.0:
                return MPCController().control([0.0, 0.0, 0.0], [px, py, 0.0], dt)
            twist = Twist()
            twist.angular.z = SEARCH_ANGULAR_SPEED
            return twist
        if self.mode is Mode.PP:
            return pure_pursuit(px, math.atan2(py, px))
        return pid_control(px, py, past_px, past_py, dt)