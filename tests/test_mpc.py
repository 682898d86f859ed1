import math

import pytest

from doggybot.mpc import (
    MAX_ANGULAR_VELOCITY,
    MAX_LINEAR_VELOCITY,
    MPCController,
    diff_model,
)


def test_diff_model_heading_zero():
    step = diff_model([0.0, 0.0, 0.0], [1.0, 2.0], 0.5)
    assert step.tolist() == pytest.approx([0.5, 0.0, 1.0])


def test_diff_model_heading_quarter_turn():
    step = diff_model([3.0, 4.0, math.pi / 2], [2.0, -1.0], 0.1)
    assert step[0] == pytest.approx(0.0, abs=1e-12)
    assert step[1] == pytest.approx(0.2)
    assert step[2] == pytest.approx(-0.1)


def test_diff_model_zero_dt_is_still():
    step = diff_model([1.0, 2.0, 0.3], [0.4, 0.2], 0.0)
    assert step.tolist() == [0.0, 0.0, 0.0]


def test_target_at_state_gives_zero_command():
    twist = MPCController().control([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 0.1)
    assert twist.linear.x == pytest.approx(0.0, abs=1e-6)
    assert twist.angular.z == pytest.approx(0.0, abs=1e-6)


def test_far_target_ahead_saturates_forward_speed():
    twist = MPCController().control([0.0, 0.0, 0.0], [10.0, 0.0, 0.0], 0.1)
    assert twist.linear.x == pytest.approx(MAX_LINEAR_VELOCITY, abs=1e-4)
    assert twist.angular.z == pytest.approx(0.0, abs=1e-6)


def test_target_to_left_turns_left():
    twist = MPCController().control([0.0, 0.0, 0.0], [1.0, 1.0, 0.0], 0.1)
    assert twist.angular.z > 0.0
    assert twist.linear.x > 0.0


def test_commands_stay_within_limits():
    twist = MPCController().control([0.0, 0.0, 0.0], [2.0, -3.0, 0.0], 0.1)
    assert abs(twist.linear.x) <= MAX_LINEAR_VELOCITY + 1e-9
    assert abs(twist.angular.z) <= MAX_ANGULAR_VELOCITY + 1e-9


def test_mirrored_target_mirrors_command():
    left = MPCController().control([0.0, 0.0, 0.0], [1.5, 0.8, 0.0], 0.1)
    right = MPCController().control([0.0, 0.0, 0.0], [1.5, -0.8, 0.0], 0.1)
    assert left.linear.x == pytest.approx(right.linear.x, abs=1e-5)
    assert left.angular.z == pytest.approx(-right.angular.z, abs=1e-5)


def test_solve_returns_two_inputs_after_control():
    ctrl = MPCController()
    twist = ctrl.control([0.0, 0.0, 0.0], [1.0, 0.5, 0.0], 0.1)
    cmd = ctrl.solve([0.0, 0.0, 0.0])
    assert len(cmd) == 2
    assert cmd[0] == pytest.approx(twist.linear.x, abs=1e-6)
    assert cmd[1] == pytest.approx(twist.angular.z, abs=1e-6)


def test_solve_before_control_raises():
    with pytest.raises(RuntimeError):
        MPCController().solve([0.0, 0.0, 0.0])


def test_wrong_state_size_raises():
    with pytest.raises(ValueError):
        MPCController().control([0.0, 0.0], [1.0, 0.0, 0.0], 0.1)


def test_invalid_horizon_raises():
    with pytest.raises(ValueError):
        MPCController(horizon=0)