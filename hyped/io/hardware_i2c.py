"""I2C bus access through the Linux i2c-dev character devices."""

from __future__ import annotations

import fcntl
import os
from pathlib import Path

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import HardwareError
from hyped.io.interfaces import I2c

DEFAULT_DEVICE_DIR = "/dev"
I2C_SLAVE = 0x0703  # selects the device address for following transactions


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be a byte, got {value}")


class HardwareI2c(I2c):
    """An I2C bus opened from its device file."""

    def __init__(self, logger: BaseLogger, file_descriptor: int) -> None:
        self._logger = logger
        self._fd: int | None = file_descriptor
        self.sensor_address = 0

    @classmethod
    def create(
        cls,
        logger: BaseLogger,
        bus_address: int,
        device_dir: str | Path = DEFAULT_DEVICE_DIR,
    ) -> HardwareI2c:
        """Open ``i2c-<bus_address>`` in ``device_dir``."""
        path = Path(device_dir) / f"i2c-{bus_address}"
        try:
            file_descriptor = os.open(path, os.O_RDWR)
        except OSError as error:
            logger.log(LogLevel.FATAL, "Failed to find i2c device")
            raise HardwareError(f"failed to open i2c device {path}") from error
        return cls(logger, file_descriptor)

    def read_byte(self, device_address: int, register_address: int) -> int:
        _check_byte("register address", register_address)
        fd = self._select(device_address)
        if self._write(fd, bytes([register_address])) != 1:
            self._logger.log(LogLevel.FATAL, "Failed to write to i2c device")
            raise HardwareError(f"failed to select register {register_address:#04x}")
        try:
            data = os.read(fd, 1)
        except OSError:
            data = b""
        if len(data) != 1:
            self._logger.log(LogLevel.FATAL, "Failed to read from i2c device")
            raise HardwareError(f"failed to read from device {device_address:#04x}")
        self._logger.log(LogLevel.DEBUG, "Successfully read byte from i2c device")
        return data[0]

    def write_byte_to_register(self, device_address: int, register_address: int, data: int) -> None:
        _check_byte("register address", register_address)
        _check_byte("data", data)
        fd = self._select(device_address)
        if self._write(fd, bytes([register_address, data])) != 2:
            self._logger.log(LogLevel.FATAL, "Failed to write to i2c device")
            raise HardwareError(f"failed to write register {register_address:#04x}")
        self._logger.log(LogLevel.DEBUG, "Successfully wrote byte to i2c device register")

    def write_byte(self, device_address: int, data: int) -> None:
        _check_byte("data", data)
        fd = self._select(device_address)
        if self._write(fd, bytes([data])) != 1:
            self._logger.log(LogLevel.FATAL, "Failed to write to i2c device")
            raise HardwareError(f"failed to write to device {device_address:#04x}")
        self._logger.log(LogLevel.DEBUG, "Successfully wrote byte to i2c device")

    def close(self) -> None:
        """Release the bus device file."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> HardwareI2c:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _select(self, device_address: int) -> int:
        _check_byte("device address", device_address)
        if self._fd is None:
            raise HardwareError("i2c bus is closed")
        if self.sensor_address != device_address:
            self._set_sensor_address(self._fd, device_address)
        return self._fd

    def _set_sensor_address(self, fd: int, device_address: int) -> None:
        self.sensor_address = device_address
        try:
            fcntl.ioctl(fd, I2C_SLAVE, device_address)
        except OSError:
            self._logger.log(LogLevel.FATAL, "Failed to set sensor address")

    @staticmethod
    def _write(fd: int, data: bytes) -> int:
        try:
            return os.write(fd, data)
        except OSError:
            return -1