# doggybot

Velocity control for a quadruped robot driven like a differential-drive
base. Given where the robot is and where it should go, the package
computes a velocity command (forward speed in `linear.x`, turn rate in
`angular.z`) using one of three strategies:

- **Pure pursuit** (`doggybot.pp.pure_pursuit`): turns in place at
  1.5 times the heading error while that error is 0.1 or more in size,
  otherwise drives forward at 0.3 times the distance ahead and turns by the
  heading error.
- **PD control** (`doggybot.pid.pid_control`): proportional-derivative
  control on the goal offset in the robot frame, using the previous offset
  and the time step for the derivative term.
- **Model predictive control** (`doggybot.mpc.MPCController`): optimises a
  70-step sequence of inputs over a unicycle model (`diff_model`) with
  SciPy's L-BFGS-B, bounding the first command to ±0.5 m/s and
  ±0.5 rad/s, and returns that first command.

## Modules

| Module | Contents |
| --- | --- |
| `doggybot.geometry` | `Point`, `Quaternion`, `Pose`, `Twist`, `yaw_from_quaternion`, `find_body_pose` |
| `doggybot.pp` | `pure_pursuit(px, py)` |
| `doggybot.pid` | `pid_control(px, py, past_px, past_py, dt)` |
| `doggybot.mpc` | `diff_model(x, u, dt)`, `MPCController` with `control` and `solve` |
| `doggybot.controller` | `Mode`, `Controller`, `goal_in_robot_frame`, `follow_point` |

## Usage

Steering toward a point given in the robot frame:

```python
from doggybot.pp import pure_pursuit
from doggybot.pid import pid_control

cmd = pure_pursuit(1.0, 0.05)
print(cmd.linear.x, cmd.angular.z)

cmd = pid_control(1.0, 0.2, 1.1, 0.25, 0.1)
print(cmd.linear.x, cmd.angular.z)
```

Model predictive control from the origin toward a target state
`[x, y, heading]`:

```python
from doggybot.mpc import MPCController

cmd = MPCController().control([0.0, 0.0, 0.0], [1.0, 0.2, 0.0], 0.1)
```

Expressing a goal in the robot's own frame:

```python
from doggybot.controller import goal_in_robot_frame
```

`goal_in_robot_frame(goal, robot)` takes two planar poses held in
`Twist` objects (position in `linear.x`/`linear.y`, yaw in `angular.z`)
and returns the goal's `(x, y)` offset as seen from the robot.

### The goal-seeking controller

`Controller(mode, publish=None)` takes a `Mode` (`MPC`, `PP` or `PID`) or
its name as a string; an unknown name raises `ValueError`. It keeps the
latest goal and robot pose:

- `goal_pose_callback(pose)` stores a goal `Pose`.
- `robot_pose_callback(poses)` takes the robot's pose from a list of poses
  using `find_body_pose`: the first one whose height lies strictly between
  0.6 and 0.8 m. If none does, the stored pose is left unchanged.
- `callback(now)` takes a monotonic time in seconds, measures the step from
  the previous call, and returns the command from `controller_mode`,
  passing it to `publish` if one was given. Once the robot is within 0.3 m
  of the goal it returns `None`.

In `MPC` mode a goal behind the robot (non-positive `x` offset) gives a
turn in place at 0.2 rad/s instead of an optimised command. In `PP` mode
the heading error fed to `pure_pursuit` is the bearing of the goal.

`follow_point(points)` steers toward the first finite `Point` above a
ground height of -0.3 m, turning in place when it lies 0.7 m or more to
the side; it returns `None` if there is no such point.

## What the package does not do

The package computes commands and nothing more. It does not subscribe to
or publish on any robot middleware, read sensor data or point clouds,
broadcast coordinate transforms, or provide a command-line program or
long-running node; the caller feeds poses in and sends the returned
commands on.

## Testing

The test suite uses pytest, available through the `test` extra:

```
pip install .[test]
pytest
```