"""A linear Kalman filter."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from hyped.core.clock import TimeSource


class KalmanFilter:
    """Keeps a state estimate and refines it with each measurement."""

    def __init__(
        self,
        time_source: TimeSource,
        initial_state: ArrayLike,
        initial_error_covariance: ArrayLike,
    ) -> None:
        state = np.asarray(initial_state, dtype=float)
        covariance = np.asarray(initial_error_covariance, dtype=float)
        if state.ndim != 1 or state.size == 0:
            raise ValueError("initial state must be a non-empty vector")
        if covariance.shape != (state.size, state.size):
            raise ValueError(
                f"error covariance must be {state.size}x{state.size}, got {covariance.shape}"
            )
        self._time_source = time_source
        self.last_update_time = time_source.now()
        self._state_estimate = state.copy()
        self._error_covariance = covariance.copy()

    @property
    def state_dimension(self) -> int:
        return self._state_estimate.size

    def filter(
        self,
        transition_matrix: ArrayLike,
        transition_covariance: ArrayLike,
        measurement_matrix: ArrayLike,
        measurement_noise_covariance: ArrayLike,
        measurement: ArrayLike,
    ) -> None:
        """Predict with the transition model, then correct with ``measurement``."""
        n = self.state_dimension
        transition = np.asarray(transition_matrix, dtype=float)
        process_noise = np.asarray(transition_covariance, dtype=float)
        observation = np.asarray(measurement_matrix, dtype=float)
        noise = np.asarray(measurement_noise_covariance, dtype=float)
        z = np.asarray(measurement, dtype=float)
        if transition.shape != (n, n) or process_noise.shape != (n, n):
            raise ValueError(f"transition matrices must be {n}x{n}")
        if z.ndim != 1 or z.size == 0:
            raise ValueError("measurement must be a non-empty vector")
        m = z.size
        if observation.shape != (m, n):
            raise ValueError(f"measurement matrix must be {m}x{n}")
        if noise.shape != (m, m):
            raise ValueError(f"measurement noise covariance must be {m}x{m}")

        apriori_state = transition @ self._state_estimate
        apriori_covariance = transition.T @ self._error_covariance @ transition + process_noise
        innovation_covariance = observation @ apriori_covariance @ observation.T + noise
        gain = apriori_covariance @ observation.T @ np.linalg.inv(innovation_covariance)
        self._state_estimate = apriori_state + gain @ (z - observation @ apriori_state)

    @property
    def state_estimate(self) -> np.ndarray:
        return self._state_estimate.copy()

    @property
    def error_covariance(self) -> np.ndarray:
        return self._error_covariance.copy()