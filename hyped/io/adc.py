"""Analogue input pins exposed through the industrial I/O sysfs interface."""

from __future__ import annotations

import re
from pathlib import Path
from typing import BinaryIO

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import HardwareError

DEFAULT_ROOT = "/sys/bus/iio/devices/iio:device0"

# The value file holds at most four digits since the converters are 12 bit ([0, 4095]).
_READ_SIZE = 4
_MIN_BYTES = 2
_LEADING_INTEGER = re.compile(rb"\s*([+-]?\d+)")


def _parse_leading_integer(data: bytes) -> int:
    """Parse the integer at the start of ``data``; 0 if there is none."""
    match = _LEADING_INTEGER.match(data)
    return int(match.group(1)) if match else 0


class Adc:
    """One analogue input pin, read from its raw voltage file."""

    def __init__(self, logger: BaseLogger, pin: int, file: BinaryIO) -> None:
        self._logger = logger
        self.pin = pin
        self._file = file

    @classmethod
    def create(cls, logger: BaseLogger, pin: int, root: str | Path = DEFAULT_ROOT) -> Adc:
        """Open the raw voltage file of ``pin`` under ``root``."""
        path = Path(root) / f"in_voltage{pin}_raw"
        try:
            file = open(path, "rb", buffering=0)
        except OSError as error:
            logger.log(LogLevel.FATAL, "Failed to open ADC file")
            raise HardwareError(f"failed to open ADC file {path}") from error
        logger.log(LogLevel.DEBUG, "Successfully created Adc instance")
        return cls(logger, pin, file)

    def read_value(self) -> int:
        """Return the raw 12-bit reading of the pin."""
        if self._file.closed:
            raise HardwareError(f"ADC pin {self.pin} is closed")
        try:
            offset = self._file.seek(0)
        except OSError:
            offset = -1
        if offset != 0:
            self._logger.log(LogLevel.FATAL, "Failed to reset file offset")
            raise HardwareError("failed to reset ADC file offset")
        try:
            data = self._file.read(_READ_SIZE) or b""
        except OSError:
            data = b""
        if len(data) < _MIN_BYTES:
            self._logger.log(LogLevel.FATAL, "Failed to read sufficient bytes from ADC")
            raise HardwareError(f"read only {len(data)} bytes from ADC pin {self.pin}")
        raw_voltage = _parse_leading_integer(data) & 0xFFFF
        self._logger.log(
            LogLevel.DEBUG, "Raw voltage from ADC pin %d: %i", self.pin, raw_voltage
        )
        return raw_voltage

    def close(self) -> None:
        """Release the value file."""
        self._file.close()

    def __enter__(self) -> Adc:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()