import pytest

from hyped.core.types import HardwareError
from hyped.io.interfaces import I2c
from hyped.sensors.i2c_sensors import MuxSensor
from hyped.sensors.mux import DEFAULT_MUX_ADDRESS, Mux
from hyped.utils.dummy_i2c import DummyI2c
from hyped.utils.dummy_i2c_sensor import DummyI2cSensor
from hyped.utils.dummy_logger import DummyLogger


class _RecordingI2c(I2c):
    def __init__(self, fail_on=()):
        self.writes = []
        self._fail_on = set(fail_on)

    def read_byte(self, device_address, register_address):
        raise HardwareError("not readable")

    def write_byte_to_register(self, device_address, register_address, data):
        raise HardwareError("not writable")

    def write_byte(self, device_address, data):
        if data in self._fail_on:
            raise HardwareError("write failed")
        self.writes.append((device_address, data))


class _Sensor(MuxSensor[int]):
    def __init__(self, channel, value=None, configure_fails=False):
        self._channel = channel
        self._value = value
        self._configure_fails = configure_fails

    def configure(self):
        if self._configure_fails:
            raise HardwareError("configure failed")

    def read(self):
        return self._value

    def channel(self):
        return self._channel


def test_construction_with_dummy_parts():
    sensors = [DummyI2cSensor() for _ in range(8)]
    mux = Mux(DummyLogger(), DummyI2c(), 0, sensors)
    with pytest.raises(HardwareError):
        mux.read_all_channels()


def test_too_many_sensors_rejected():
    sensors = [DummyI2cSensor() for _ in range(9)]
    with pytest.raises(ValueError):
        Mux(DummyLogger(), DummyI2c(), 0, sensors)


def test_reads_all_channels_in_order():
    i2c = _RecordingI2c()
    sensors = [_Sensor(channel, value=channel * 10) for channel in range(4)]
    mux = Mux(DummyLogger(), i2c, DEFAULT_MUX_ADDRESS, sensors)
    assert mux.read_all_channels() == [0, 10, 20, 30]
    expected_writes = []
    for channel in range(4):
        expected_writes.append((DEFAULT_MUX_ADDRESS, 1 << channel))
        expected_writes.append((DEFAULT_MUX_ADDRESS, 0x00))
    assert i2c.writes == expected_writes


def test_tolerated_failures_give_none():
    sensors = [_Sensor(channel, value=channel + 1) for channel in range(6)]
    sensors += [_Sensor(6, value=None), _Sensor(7, configure_fails=True)]
    mux = Mux(DummyLogger(), _RecordingI2c(), DEFAULT_MUX_ADDRESS, sensors)
    readings = mux.read_all_channels()
    assert readings[:6] == [1, 2, 3, 4, 5, 6]
    assert readings[6:] == [None, None]


def test_too_many_failures_raise():
    sensors = [_Sensor(channel, value=1) for channel in range(5)]
    sensors += [_Sensor(channel, value=None) for channel in range(5, 8)]
    mux = Mux(DummyLogger(), _RecordingI2c(), DEFAULT_MUX_ADDRESS, sensors)
    with pytest.raises(HardwareError):
        mux.read_all_channels()


def test_unselectable_channel_raises():
    i2c = _RecordingI2c()
    mux = Mux(DummyLogger(), i2c, DEFAULT_MUX_ADDRESS, [_Sensor(8, value=1)])
    with pytest.raises(HardwareError):
        mux.read_all_channels()
    assert i2c.writes == []


def test_close_failure_raises():
    i2c = _RecordingI2c(fail_on={0x00})
    mux = Mux(DummyLogger(), i2c, DEFAULT_MUX_ADDRESS, [_Sensor(2, value=5)])
    with pytest.raises(HardwareError):
        mux.read_all_channels()
    assert i2c.writes == [(DEFAULT_MUX_ADDRESS, 1 << 2)]