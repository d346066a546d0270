"""Interface for sensors that sit behind an I2C multiplexer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class MuxSensor(ABC, Generic[T]):
    """A sensor reachable through one channel of an I2C mux.

    ``configure`` and ``read`` raise ``HardwareError`` on failure; ``read`` may
    also return None when no reading is available.
    """

    @abstractmethod
    def configure(self) -> None:
        """Carry out the initialisation steps the sensor needs before reading."""

    @abstractmethod
    def read(self) -> T | None:
        """Return the current reading of the sensor."""

    @abstractmethod
    def channel(self) -> int:
        """Return the mux channel the sensor is attached to."""