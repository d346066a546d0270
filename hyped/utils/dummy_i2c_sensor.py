"""A mux sensor with no hardware behind it."""

from __future__ import annotations

from hyped.sensors.i2c_sensors import MuxSensor


class DummyI2cSensor(MuxSensor[int]):
    """Always configures successfully and reads 0 on channel 0."""

    def configure(self) -> None:
        return None

    def read(self) -> int:
        return 0

    def channel(self) -> int:
        return 0