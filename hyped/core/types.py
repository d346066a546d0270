"""Basic value types shared across the pod software."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

EPSILON = 0.0001

NUM_IMUS = 4
NUM_AXIS = 3
NUM_ENCODERS = 4
NUM_KEYENCE = 2

CAN_MAX_DATA_LENGTH = 8

RawImuData = Sequence[Sequence[float]]
ImuData = Sequence[float]
EncoderData = Sequence[int]
KeyenceData = Sequence[int]


class DigitalSignal(IntEnum):
    """Level of a digital line."""

    LOW = 0
    HIGH = 1


class HardwareError(Exception):
    """Raised when a peripheral operation fails."""


@dataclass(frozen=True)
class CanFrame:
    """A CAN bus frame: identifier with flags, payload length and payload."""

    can_id: int
    can_dlc: int = 0
    data: bytes = field(default=bytes(CAN_MAX_DATA_LENGTH))

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != CAN_MAX_DATA_LENGTH:
            raise ValueError(f"CAN frame data must be {CAN_MAX_DATA_LENGTH} bytes, got {len(data)}")
        if not 0 <= self.can_dlc <= CAN_MAX_DATA_LENGTH:
            raise ValueError(f"CAN payload length out of range: {self.can_dlc}")
        object.__setattr__(self, "data", data)


@dataclass
class Trajectory:
    """Current displacement, velocity and acceleration of the pod."""

    displacement: float = 0.0
    velocity: float = 0.0
    acceleration: float = 0.0

    def is_close(self, other: Trajectory) -> bool:
        """Whether every component differs from ``other`` by less than EPSILON."""
        return all(
            abs(mine - theirs) < EPSILON
            for mine, theirs in (
                (self.displacement, other.displacement),
                (self.velocity, other.velocity),
                (self.acceleration, other.acceleration),
            )
        )