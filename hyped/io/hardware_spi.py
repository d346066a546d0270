"""SPI bus access through the Linux spidev driver."""

from __future__ import annotations

import fcntl
import os
import struct
from array import array
from enum import Enum, IntEnum

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import HardwareError
from hyped.io.interfaces import Spi

_IOC_WRITE = 1
_SPI_IOC_MAGIC = ord("k")

# Layout of struct spi_ioc_transfer: tx_buf, rx_buf, len, speed_hz, delay_usecs,
# bits_per_word, cs_change, tx_nbits, rx_nbits, pad.
_TRANSFER = struct.Struct("=QQIIHBBBBH")


def _iow(kind: int, number: int, size: int) -> int:
    return (_IOC_WRITE << 30) | (size << 16) | (kind << 8) | number


SPI_IOC_WR_MODE = _iow(_SPI_IOC_MAGIC, 1, 1)
SPI_IOC_WR_LSB_FIRST = _iow(_SPI_IOC_MAGIC, 2, 1)
SPI_IOC_WR_BITS_PER_WORD = _iow(_SPI_IOC_MAGIC, 3, 1)
SPI_IOC_WR_MAX_SPEED_HZ = _iow(_SPI_IOC_MAGIC, 4, 4)
SPI_IOC_MESSAGE_2 = _iow(_SPI_IOC_MAGIC, 0, 2 * _TRANSFER.size)


class SpiBus(IntEnum):
    SPI0 = 0
    SPI1 = 1


class SpiMode(IntEnum):
    MODE0 = 0
    MODE1 = 1
    MODE2 = 2
    MODE3 = 3


class SpiWordSize(IntEnum):
    """Bits per word."""

    WORD_SIZE_4 = 4
    WORD_SIZE_8 = 8
    WORD_SIZE_16 = 16
    WORD_SIZE_32 = 32


class SpiBitOrder(IntEnum):
    MSB_FIRST = 0
    LSB_FIRST = 1


class Clock(Enum):
    """Supported clock frequencies."""

    CLOCK_500KHZ = "500kHz"
    CLOCK_1MHZ = "1MHz"
    CLOCK_4MHZ = "4MHz"
    CLOCK_16MHZ = "16MHz"
    CLOCK_20MHZ = "20MHz"


_CLOCK_HZ = {
    Clock.CLOCK_500KHZ: 500000,
    Clock.CLOCK_1MHZ: 1000000,
    Clock.CLOCK_4MHZ: 4000000,
    Clock.CLOCK_16MHZ: 16000000,
    Clock.CLOCK_20MHZ: 20000000,
}


def spi_bus_address(bus: SpiBus) -> str:
    """Return the device file of ``bus``."""
    return "/dev/spidev0.0" if bus == SpiBus.SPI0 else "/dev/spidev1.0"


def clock_value(clock: Clock) -> int:
    """Return the frequency of ``clock`` in hertz."""
    return _CLOCK_HZ[clock]


def _transfer(tx: int = 0, rx: int = 0, length: int = 0) -> bytes:
    return _TRANSFER.pack(tx, rx, length, 0, 0, 0, 0, 0, 0, 0)


def _address(buffer: array) -> int:
    return buffer.buffer_info()[0] if len(buffer) else 0


class HardwareSpi(Spi):
    """An SPI bus opened from its spidev device file."""

    def __init__(self, logger: BaseLogger, file_descriptor: int) -> None:
        self._logger = logger
        self._fd: int | None = file_descriptor

    @classmethod
    def create(
        cls,
        logger: BaseLogger,
        bus: SpiBus = SpiBus.SPI1,
        mode: SpiMode = SpiMode.MODE3,
        word_size: SpiWordSize = SpiWordSize.WORD_SIZE_8,
        bit_order: SpiBitOrder = SpiBitOrder.MSB_FIRST,
        clock: Clock = Clock.CLOCK_500KHZ,
    ) -> HardwareSpi:
        """Open ``bus`` and configure clock, word size, mode and bit order."""
        try:
            fd = os.open(spi_bus_address(bus), os.O_RDWR)
        except OSError as error:
            logger.log(LogLevel.FATAL, "Failed to open SPI device")
            raise HardwareError(f"failed to open SPI device {spi_bus_address(bus)}") from error
        speed = clock_value(clock)
        settings = (
            (SPI_IOC_WR_MAX_SPEED_HZ, struct.pack("=I", speed),
             f"Failed to set clock frequency to {speed}"),
            (SPI_IOC_WR_BITS_PER_WORD, struct.pack("=B", int(word_size)),
             "Failed to set bits per word"),
            (SPI_IOC_WR_MODE, struct.pack("=B", int(mode)), "Failed to set SPI mode"),
            (SPI_IOC_WR_LSB_FIRST, struct.pack("=B", int(bit_order)), "Failed to set bit order"),
        )
        for request, argument, failure in settings:
            try:
                fcntl.ioctl(fd, request, argument)
            except OSError as error:
                logger.log(LogLevel.FATAL, failure)
                os.close(fd)
                raise HardwareError(failure) from error
        logger.log(LogLevel.DEBUG, "Successfully initialised SPI")
        return cls(logger, fd)

    def read(self, register_address: int, length: int) -> bytes:
        if not 0 <= length <= 0xFFFF:
            raise ValueError(f"SPI read length out of range: {length}")
        tx = self._register_buffer(register_address)
        rx = array("B", bytes(length))
        message = _transfer(tx=_address(tx), length=1) + _transfer(rx=_address(rx), length=length)
        self._transfer_message(message, "Failed to read from SPI device")
        self._logger.log(LogLevel.DEBUG, "Successfully read from SPI device")
        return rx.tobytes()

    def write(self, register_address: int, data: bytes) -> None:
        payload = array("B", bytes(data))
        if len(payload) > 0xFFFF:
            raise ValueError(f"SPI write length out of range: {len(payload)}")
        tx = self._register_buffer(register_address)
        message = _transfer(tx=_address(tx), length=1) + _transfer(
            tx=_address(payload), length=len(payload)
        )
        self._transfer_message(message, "Failed to write to SPI device")
        self._logger.log(LogLevel.DEBUG, "Successfully wrote to SPI device")

    def close(self) -> None:
        """Release the bus device file."""
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> HardwareSpi:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _register_buffer(register_address: int) -> array:
        if not 0 <= register_address <= 0xFF:
            raise ValueError(f"register address must be a byte, got {register_address}")
        return array("B", [register_address])

    def _transfer_message(self, message: bytes, failure: str) -> None:
        if self._fd is None:
            raise HardwareError("SPI bus is closed")
        try:
            fcntl.ioctl(self._fd, SPI_IOC_MESSAGE_2, message)
        except OSError as error:
            self._logger.log(LogLevel.FATAL, failure)
            raise HardwareError(failure) from error