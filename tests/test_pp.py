import pytest

from doggybot.pp import pure_pursuit


def test_large_positive_error_turns_in_place():
    twist = pure_pursuit(2.0, 0.1)
    assert twist.linear.x == 0.0
    assert twist.angular.z == pytest.approx(0.15)


def test_large_negative_error_turns_in_place():
    twist = pure_pursuit(2.0, -0.4)
    assert twist.linear.x == 0.0
    assert twist.angular.z < 0.0


def test_small_error_drives_forward():
    twist = pure_pursuit(2.0, 0.05)
    assert twist.linear.x == pytest.approx(0.6)
    assert twist.angular.z == pytest.approx(0.05)


def test_turning_is_symmetric():
    left = pure_pursuit(1.0, 0.5)
    right = pure_pursuit(1.0, -0.5)
    assert left.angular.z == pytest.approx(-right.angular.z)