"""An I2C bus with no hardware behind it, on which every transfer fails."""

from __future__ import annotations

from hyped.core.types import HardwareError
from hyped.io.interfaces import I2c


class DummyI2c(I2c):
    """I2C stand-in whose reads and writes always fail."""

    def read_byte(self, device_address: int, register_address: int) -> int:
        raise HardwareError(
            f"no device to read register {register_address:#04x} of device {device_address:#04x}"
        )

    def write_byte_to_register(self, device_address: int, register_address: int, data: int) -> None:
        raise HardwareError(
            f"no device to write register {register_address:#04x} of device {device_address:#04x}"
        )

    def write_byte(self, device_address: int, data: int) -> None:
        raise HardwareError(f"no device to write to at {device_address:#04x}")