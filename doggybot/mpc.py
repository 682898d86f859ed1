"""Model predictive control of a differential-drive robot."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy.optimize import minimize

from doggybot.geometry import Twist

MAX_LINEAR_VELOCITY = 0.5  # m/s
MAX_ANGULAR_VELOCITY = 0.5  # rad/s
MAX_DELTA_VELOCITY = 0.5  # m/s
MAX_DELTA_OMEGA = math.pi / 2.0  # rad/s

HORIZON = 70
STATE_SIZE = 3
INPUT_SIZE = 2

STATE_WEIGHTS = np.diag([10.0, 80.0, 1.0])
INPUT_WEIGHTS = np.diag([1.2, 0.25])
TERMINAL_WEIGHTS = np.diag([30.0, 80.0, 1.0])

MAX_ITERATIONS = 1000
TOLERANCE = 1e-6


def diff_model(x: Sequence[float], u: Sequence[float], dt: float) -> np.ndarray:
    """Return the state increment of the unicycle model over one step."""
    return np.array(
        [u[0] * math.cos(x[2]), u[0] * math.sin(x[2]), u[1]], dtype=float
    ) * dt


class MPCController:
    """Finite-horizon optimal controller over a unicycle model."""

    def __init__(self, horizon: int = HORIZON) -> None:
        if horizon < 1:
            raise ValueError("horizon must be at least 1")
        self.horizon = horizon
        self._target: np.ndarray | None = None
        self._dt = 0.0

    def control(
        self, state: Sequence[float], target: Sequence[float], dt: float
    ) -> Twist:
        """Set the reference and step, solve, and return the first command."""
        target_arr = self._as_state(target, "target")
        self._as_state(state, "state")
        self._target = target_arr
        self._dt = float(dt)
        linear, angular = self.solve(state)
        twist = Twist()
        twist.linear.x = linear
        twist.angular.z = angular
        return twist

    def solve(self, x0: Sequence[float]) -> list[float]:
        """Optimise the input sequence from ``x0`` and return its first input."""
        if self._target is None:
            raise RuntimeError("no target set; call control() first")
        start = self._as_state(x0, "x0")
        bounds = [
            (-MAX_LINEAR_VELOCITY, MAX_LINEAR_VELOCITY),
            (-MAX_ANGULAR_VELOCITY, MAX_ANGULAR_VELOCITY),
        ] + [(None, None)] * (INPUT_SIZE * self.horizon - INPUT_SIZE)
        result = minimize(
            self._objective,
            np.zeros(INPUT_SIZE * self.horizon),
            args=(start, self._target, self._dt),
            jac=True,
            method="L-BFGS-B",
            bounds=bounds,
            tol=TOLERANCE,
            options={"maxiter": MAX_ITERATIONS},
        )
        return result.x[:INPUT_SIZE].tolist()

    @staticmethod
    def _as_state(values: Sequence[float], name: str) -> np.ndarray:
        arr = np.asarray(values, dtype=float)
        if arr.shape != (STATE_SIZE,):
            raise ValueError(f"{name} must have {STATE_SIZE} elements")
        return arr

    def _rollout(self, x0: np.ndarray, u: np.ndarray, dt: float) -> np.ndarray:
        states = np.empty((self.horizon, STATE_SIZE))
        states[0] = x0
        for k in range(self.horizon - 1):
            states[k + 1] = states[k] + diff_model(states[k], u[k], dt)
        return states

    def _objective(
        self, flat: np.ndarray, x0: np.ndarray, ref: np.ndarray, dt: float
    ) -> tuple[float, np.ndarray]:
        # The final predicted state is unconstrained, so it sits on the
        # reference and contributes nothing; only the constrained states count.
        u = flat.reshape(self.horizon, INPUT_SIZE)
        states = self._rollout(x0, u, dt)
        err = states - ref

        cost = float(np.einsum("ki,ij,kj->", err, STATE_WEIGHTS, err))
        cost += float(np.einsum("ki,ij,kj->", u, INPUT_WEIGHTS, u))
        direct = 2.0 * err @ STATE_WEIGHTS
        if STATE_SIZE < self.horizon:
            terminal = err[STATE_SIZE]
            cost += float(terminal @ TERMINAL_WEIGHTS @ terminal)
            direct[STATE_SIZE] += 2.0 * TERMINAL_WEIGHTS @ terminal

        grad = 2.0 * u @ INPUT_WEIGHTS
        adjoint = direct[-1].copy()
        for k in range(self.horizon - 2, -1, -1):
            cos_t = math.cos(states[k, 2])
            sin_t = math.sin(states[k, 2])
            v = u[k, 0]
            grad[k, 0] += dt * (cos_t * adjoint[0] + sin_t * adjoint[1])
            grad[k, 1] += dt * adjoint[2]
            previous = direct[k] + adjoint
            previous[2] += dt * v * (cos_t * adjoint[1] - sin_t * adjoint[0])
            adjoint = previous
        return cost, grad.ravel()