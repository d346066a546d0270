"""Abstract interfaces for GPIO, I2C and SPI peripherals.

Implementations raise ``HardwareError`` when an operation fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hyped.core.types import DigitalSignal


class GpioReader(ABC):
    """Read access to a single GPIO pin."""

    @abstractmethod
    def read(self) -> DigitalSignal:
        """Return the level of the pin."""


class GpioWriter(ABC):
    """Write access to a single GPIO pin."""

    @abstractmethod
    def write(self, state: DigitalSignal) -> None:
        """Drive the pin to ``state``."""


class Gpio(ABC):
    """Hands out readers and writers for GPIO pins."""

    @abstractmethod
    def get_reader(self, pin: int) -> GpioReader:
        """Return a reader for ``pin``."""

    @abstractmethod
    def get_writer(self, pin: int) -> GpioWriter:
        """Return a writer for ``pin``."""


class I2c(ABC):
    """An I2C bus."""

    @abstractmethod
    def read_byte(self, device_address: int, register_address: int) -> int:
        """Read one byte from a register of a device on the bus."""

    @abstractmethod
    def write_byte_to_register(self, device_address: int, register_address: int, data: int) -> None:
        """Write one byte to a register of a device on the bus."""

    @abstractmethod
    def write_byte(self, device_address: int, data: int) -> None:
        """Write one byte to a single-register device such as a mux."""


class Spi(ABC):
    """An SPI bus."""

    @abstractmethod
    def read(self, register_address: int, length: int) -> bytes:
        """Read ``length`` bytes starting at ``register_address``."""

    @abstractmethod
    def write(self, register_address: int, data: bytes) -> None:
        """Write ``data`` starting at ``register_address``."""