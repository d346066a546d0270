"""GPIO pins driven through the Linux sysfs GPIO interface.

Pins are numbered ``32 * X + Y`` for pin ``GPIOX_Y``.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import BinaryIO

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import DigitalSignal, HardwareError
from hyped.io.interfaces import Gpio, GpioReader, GpioWriter

DEFAULT_ROOT = "/sys/class/gpio"

_VALUE_SIZE = 2
_EXPORT_SIZE = 4
_LEADING_INTEGER = re.compile(rb"\s*([+-]?\d+)")


class Edge(Enum):
    """Interrupt trigger of a pin."""

    NONE = "none"
    RISING = "rising"
    FALLING = "falling"
    BOTH = "both"


class Direction(Enum):
    """Whether a pin is an input or an output."""

    IN = "in"
    OUT = "out"


def _parse_leading_integer(data: bytes) -> int:
    match = _LEADING_INTEGER.match(data)
    return int(match.group(1)) if match else 0


def _open_for_writing(path: Path) -> BinaryIO:
    fd = os.open(path, os.O_WRONLY)
    return os.fdopen(fd, "wb", buffering=0)


def _write_all(path: Path, payload: bytes) -> int:
    """Write ``payload`` to ``path`` in one call; return the bytes written."""
    with _open_for_writing(path) as file:
        try:
            return file.write(payload) or 0
        except OSError:
            return -1


class HardwareGpioReader(GpioReader):
    """Reads a pin from its open sysfs value file."""

    def __init__(self, logger: BaseLogger, file: BinaryIO) -> None:
        self._logger = logger
        self._file = file

    def read(self) -> DigitalSignal:
        if self._file.closed:
            raise HardwareError("GPIO reader is closed")
        try:
            offset = self._file.seek(0)
        except OSError:
            offset = -1
        if offset != 0:
            self._logger.log(LogLevel.FATAL, "Failed to reset file offset")
            raise HardwareError("failed to reset GPIO file offset")
        try:
            data = self._file.read(_VALUE_SIZE) or b""
        except OSError:
            data = b""
        if len(data) != _VALUE_SIZE:
            self._logger.log(LogLevel.FATAL, "Failed to read GPIO value")
            raise HardwareError(f"read {len(data)} bytes of GPIO value, expected {_VALUE_SIZE}")
        value = _parse_leading_integer(data)
        try:
            return DigitalSignal(value)
        except ValueError:
            self._logger.log(LogLevel.FATAL, "Invalid GPIO value read")
            raise HardwareError(f"invalid GPIO value {value}") from None

    def close(self) -> None:
        """Release the value file."""
        self._file.close()

    def __enter__(self) -> HardwareGpioReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HardwareGpioWriter(GpioWriter):
    """Writes a pin through its open sysfs value file."""

    def __init__(self, logger: BaseLogger, file: BinaryIO) -> None:
        self._logger = logger
        self._file = file

    def write(self, state: DigitalSignal) -> None:
        if self._file.closed:
            raise HardwareError("GPIO writer is closed")
        signal_value = int(DigitalSignal(state))
        payload = f"{signal_value}".encode() + b"\x00"
        try:
            written = self._file.write(payload) or 0
        except OSError:
            written = -1
        if written != len(payload):
            self._logger.log(LogLevel.FATAL, "Failed to write GPIO value")
            raise HardwareError(f"failed to write GPIO value {signal_value}")
        self._logger.log(LogLevel.DEBUG, "Wrote %d to GPIO", signal_value)

    def close(self) -> None:
        """Release the value file."""
        self._file.close()

    def __enter__(self) -> HardwareGpioWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HardwareGpio(Gpio):
    """Exports and configures pins under ``root`` and hands out readers and writers."""

    def __init__(self, logger: BaseLogger, root: str | Path = DEFAULT_ROOT) -> None:
        self._logger = logger
        self._root = Path(root)

    def get_reader(self, pin: int, edge: Edge = Edge.BOTH) -> HardwareGpioReader:
        """Configure ``pin`` as an input and return a reader for it."""
        self._prepare(pin, edge, Direction.IN)
        return HardwareGpioReader(self._logger, self._open_value(pin, Direction.IN))

    def get_writer(self, pin: int, edge: Edge = Edge.BOTH) -> HardwareGpioWriter:
        """Configure ``pin`` as an output and return a writer for it."""
        self._prepare(pin, edge, Direction.OUT)
        return HardwareGpioWriter(self._logger, self._open_value(pin, Direction.OUT))

    def _prepare(self, pin: int, edge: Edge, direction: Direction) -> None:
        if not 0 <= pin <= 0xFF:
            raise ValueError(f"GPIO pin must be in [0, 255], got {pin}")
        try:
            self._initialise_pin(pin, edge, direction)
        except HardwareError:
            self._logger.log(LogLevel.FATAL, "Failed to initialise GPIO %d", pin)
            raise

    def _pin_dir(self, pin: int) -> Path:
        return self._root / f"gpio{pin}"

    def _export_pin(self, pin: int) -> None:
        path = self._root / "export"
        payload = f"{pin}".encode().ljust(_EXPORT_SIZE, b"\x00")[:_EXPORT_SIZE]
        try:
            written = _write_all(path, payload)
        except OSError as error:
            self._logger.log(LogLevel.FATAL, "Failed to open GPIO export file")
            raise HardwareError(f"failed to open GPIO export file {path}") from error
        if written != len(payload):
            self._logger.log(LogLevel.FATAL, "Failed to export GPIO %d", pin)
            raise HardwareError(f"failed to export GPIO {pin}")
        self._logger.log(LogLevel.DEBUG, "Successfully exported GPIO %d", pin)

    def _initialise_pin(self, pin: int, edge: Edge, direction: Direction) -> None:
        if not self._pin_dir(pin).exists():
            self._logger.log(LogLevel.DEBUG, "GPIO %d not exported, exporting", pin)
            try:
                self._export_pin(pin)
            except HardwareError:
                self._logger.log(
                    LogLevel.FATAL, "Failed to export GPIO %d while initialising", pin
                )
                raise
        self._write_setting(
            pin, "direction", direction.value, "Failed to set GPIO %d direction"
        )
        self._write_setting(pin, "edge", edge.value, "Failed to set the edge for GPIO %d")
        self._logger.log(LogLevel.DEBUG, "Successfully initialised GPIO %d", pin)

    def _write_setting(self, pin: int, name: str, value: str, failure: str) -> None:
        path = self._pin_dir(pin) / name
        payload = value.encode() + b"\x00"
        try:
            written = _write_all(path, payload)
        except OSError as error:
            self._logger.log(LogLevel.FATAL, f"Failed to open GPIO {name} file")
            raise HardwareError(f"failed to open GPIO {name} file {path}") from error
        if written != len(payload):
            self._logger.log(LogLevel.FATAL, failure, pin)
            raise HardwareError(failure % pin)

    def _open_value(self, pin: int, direction: Direction) -> BinaryIO:
        path = self._pin_dir(pin) / "value"
        try:
            if direction is Direction.IN:
                return open(path, "rb", buffering=0)
            return _open_for_writing(path)
        except OSError as error:
            self._logger.log(LogLevel.FATAL, "Failed to open GPIO value file")
            self._logger.log(LogLevel.FATAL, "Failed to get file descriptor for GPIO %d", pin)
            raise HardwareError(f"failed to open GPIO value file {path}") from error