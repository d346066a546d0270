"""A navigator that simply averages sensor readings."""

from __future__ import annotations

from dataclasses import replace

from hyped.core.types import (
    NUM_ENCODERS,
    NUM_IMUS,
    NUM_KEYENCE,
    EncoderData,
    KeyenceData,
    RawImuData,
    Trajectory,
)
from hyped.navigation.consts import Navigator


class NaiveNavigator(Navigator):
    """Displacement is the mean encoder reading; acceleration the summed IMU axes per IMU."""

    def __init__(self) -> None:
        self._trajectory = Trajectory()

    def current_trajectory(self) -> Trajectory:
        return replace(self._trajectory)

    def keyence_update(self, keyence_data: KeyenceData) -> None:
        # Keyence readings have no direct influence on the trajectory.
        if len(keyence_data) != NUM_KEYENCE:
            raise ValueError(f"expected {NUM_KEYENCE} keyence readings, got {len(keyence_data)}")

    def encoder_update(self, encoder_data: EncoderData) -> None:
        if len(encoder_data) != NUM_ENCODERS:
            raise ValueError(f"expected {NUM_ENCODERS} encoder readings, got {len(encoder_data)}")
        self._trajectory.displacement = sum(encoder_data) / NUM_ENCODERS

    def imu_update(self, imu_data: RawImuData) -> None:
        if len(imu_data) != NUM_IMUS:
            raise ValueError(f"expected {NUM_IMUS} IMU readings, got {len(imu_data)}")
        total = sum(sum(axes) for axes in imu_data)
        self._trajectory.acceleration = total / NUM_IMUS
        self._trajectory.velocity = 0.0