import pytest

from hyped.sensors.i2c_sensors import MuxSensor
from hyped.utils.dummy_i2c_sensor import DummyI2cSensor


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        MuxSensor()


def test_dummy_sensor_is_a_mux_sensor():
    sensor = DummyI2cSensor()
    assert isinstance(sensor, MuxSensor)
    assert (sensor.channel(), sensor.read()) == (0, 0)