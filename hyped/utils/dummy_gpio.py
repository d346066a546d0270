"""A GPIO implementation driven by callbacks, needing no hardware."""

from __future__ import annotations

from collections.abc import Callable

from hyped.core.types import DigitalSignal, HardwareError
from hyped.io.interfaces import Gpio, GpioReader, GpioWriter

ReadHandler = Callable[[int], "DigitalSignal | None"]
WriteHandler = Callable[[int, DigitalSignal], object]


class DummyGpioReader(GpioReader):
    """Reads a pin by calling the read handler with the pin number."""

    def __init__(self, pin: int, read_handler: ReadHandler) -> None:
        self.pin = pin
        self._read_handler = read_handler

    def read(self) -> DigitalSignal:
        value = self._read_handler(self.pin)
        if value is None:
            raise HardwareError(f"failed to read GPIO pin {self.pin}")
        return value


class DummyGpioWriter(GpioWriter):
    """Writes a pin by calling the write handler with the pin number and state."""

    def __init__(self, pin: int, write_handler: WriteHandler) -> None:
        self.pin = pin
        self._write_handler = write_handler

    def write(self, state: DigitalSignal) -> None:
        self._write_handler(self.pin, state)


class DummyGpio(Gpio):
    """GPIO whose reads and writes are delegated to the given handlers.

    A read handler signals failure by returning None or raising HardwareError;
    a write handler signals failure by raising HardwareError.
    """

    def __init__(self, read_handler: ReadHandler, write_handler: WriteHandler) -> None:
        self._read_handler = read_handler
        self._write_handler = write_handler

    def get_reader(self, pin: int) -> DummyGpioReader:
        return DummyGpioReader(pin, self._read_handler)

    def get_writer(self, pin: int) -> DummyGpioWriter:
        return DummyGpioWriter(pin, self._write_handler)