"""Reading a group of sensors through an I2C multiplexer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import HardwareError
from hyped.io.interfaces import I2c
from hyped.sensors.i2c_sensors import MuxSensor

T = TypeVar("T")

DEFAULT_MUX_ADDRESS = 0x70
MAX_NUM_CHANNELS = 8
FAILURE_THRESHOLD = 0.25


class Mux(Generic[T]):
    """Selects each sensor's channel in turn and collects the readings."""

    def __init__(
        self,
        logger: BaseLogger,
        i2c: I2c,
        mux_address: int,
        sensors: Sequence[MuxSensor[T]],
    ) -> None:
        if len(sensors) > MAX_NUM_CHANNELS:
            raise ValueError(f"Mux can only have up to {MAX_NUM_CHANNELS} channels")
        self._logger = logger
        self._i2c = i2c
        self._mux_address = mux_address
        self._sensors = tuple(sensors)
        self._max_num_unusable_sensors = int(FAILURE_THRESHOLD * len(self._sensors))

    def read_all_channels(self) -> list[T | None]:
        """Read every sensor, in order; unusable sensors give None.

        Raises HardwareError if a channel cannot be selected or closed, or if
        more than the tolerated share of sensors could not be read.
        """
        readings: list[T | None] = []
        num_unusable_sensors = 0
        for sensor in self._sensors:
            channel = sensor.channel()
            try:
                self._select_channel(channel)
            except HardwareError as error:
                self._logger.log(LogLevel.FATAL, "Failed to select mux channel %d", channel)
                raise HardwareError(f"failed to select mux channel {channel}") from error
            try:
                sensor.configure()
            except HardwareError:
                self._logger.log(
                    LogLevel.FATAL, "Failed to configure sensor at mux channel %d", channel
                )
                num_unusable_sensors += 1
                readings.append(None)
                continue
            try:
                value = sensor.read()
            except HardwareError:
                value = None
            if value is None:
                self._logger.log(
                    LogLevel.FATAL, "Failed to get mux data from channel %d", channel
                )
                num_unusable_sensors += 1
                readings.append(None)
                continue
            readings.append(value)
            try:
                self._close_all_channels()
            except HardwareError as error:
                self._logger.log(
                    LogLevel.FATAL, "Failed to close all mux channels while reading"
                )
                raise HardwareError("failed to close all mux channels") from error
        if num_unusable_sensors > self._max_num_unusable_sensors:
            self._logger.log(
                LogLevel.FATAL,
                "Failed to read from more than %0.f%% of sensors on the mux",
                FAILURE_THRESHOLD * 100,
            )
            raise HardwareError(
                f"{num_unusable_sensors} of {len(self._sensors)} mux sensors are unusable"
            )
        return readings

    def _select_channel(self, channel: int) -> None:
        if not 0 <= channel < MAX_NUM_CHANNELS:
            self._logger.log(LogLevel.FATAL, "Mux Channel number %d is not selectable", channel)
            raise HardwareError(f"mux channel {channel} is not selectable")
        try:
            self._i2c.write_byte(self._mux_address, 1 << channel)
        except HardwareError:
            self._logger.log(LogLevel.FATAL, "Failed to select mux channel %d", channel)
            raise
        self._logger.log(LogLevel.INFO, "Mux Channel %d selected", channel)

    def _close_all_channels(self) -> None:
        try:
            self._i2c.write_byte(self._mux_address, 0x00)
        except HardwareError:
            self._logger.log(LogLevel.FATAL, "Failed to close all mux channels")
            raise
        self._logger.log(LogLevel.INFO, "All mux channels closed")