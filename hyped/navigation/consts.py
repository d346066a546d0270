"""Track constants and the navigator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from hyped.core.types import EncoderData, KeyenceData, RawImuData, Trajectory

TRACK_LENGTH = 100.0  # m
BRAKING_DISTANCE = 20.0  # m
PI = 3.14159265359
WHEEL_CIRCUMFERENCE = PI * 0.1  # m
STRIPE_DISTANCE = 10.0  # m

ZERO_TRAJECTORY = Trajectory(0.0, 0.0, 0.0)


class SensorChecks(IntEnum):
    """Outcome of a sensor agreement check."""

    UNACCEPTABLE = 0
    ACCEPTABLE = 1


class Navigator(ABC):
    """Combines sensor updates into an estimate of the pod's trajectory."""

    @abstractmethod
    def current_trajectory(self) -> Trajectory | None:
        """Return the current trajectory estimate, or None if there is none."""

    @abstractmethod
    def keyence_update(self, keyence_data: KeyenceData) -> None:
        """Take in a new set of keyence readings."""

    @abstractmethod
    def encoder_update(self, encoder_data: EncoderData) -> None:
        """Take in a new set of wheel encoder readings."""

    @abstractmethod
    def imu_update(self, imu_data: RawImuData) -> None:
        """Take in a new set of raw IMU readings."""