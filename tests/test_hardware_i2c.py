import pytest

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import HardwareError
from hyped.io.hardware_i2c import HardwareI2c


class RecordingLogger(BaseLogger):
    def __init__(self):
        self.records = []

    def log(self, level, message, *args):
        self.records.append((level, message % args if args else message))


@pytest.fixture
def bus_file(tmp_path):
    path = tmp_path / "i2c-2"
    path.write_bytes(b"")
    return path


def test_missing_device_fails_to_create(tmp_path):
    logger = RecordingLogger()
    with pytest.raises(HardwareError):
        HardwareI2c.create(logger, 1, device_dir=tmp_path)
    assert logger.records == [(LogLevel.FATAL, "Failed to find i2c device")]


def test_write_byte_to_register_writes_register_then_data(bus_file, tmp_path):
    logger = RecordingLogger()
    with HardwareI2c.create(logger, 2, device_dir=tmp_path) as i2c:
        i2c.write_byte_to_register(0x20, 0x05, 0x7F)
    assert bus_file.read_bytes() == bytes([0x05, 0x7F])
    assert (LogLevel.DEBUG, "Successfully wrote byte to i2c device register") in logger.records


def test_write_byte_writes_single_byte(bus_file, tmp_path):
    with HardwareI2c.create(RecordingLogger(), 2, device_dir=tmp_path) as i2c:
        i2c.write_byte(0x70, 0x04)
        i2c.write_byte(0x70, 0x00)
        assert i2c.sensor_address == 0x70
    assert bus_file.read_bytes() == bytes([0x04, 0x00])


def test_read_byte_writes_register_then_reads(bus_file, tmp_path):
    bus_file.write_bytes(bytes([0x00, 0xAB]))
    logger = RecordingLogger()
    with HardwareI2c.create(logger, 2, device_dir=tmp_path) as i2c:
        assert i2c.read_byte(0x10, 0x05) == 0xAB
    assert bus_file.read_bytes() == bytes([0x05, 0xAB])
    assert (LogLevel.DEBUG, "Successfully read byte from i2c device") in logger.records


def test_read_with_nothing_to_read_is_an_error(bus_file, tmp_path):
    logger = RecordingLogger()
    with HardwareI2c.create(logger, 2, device_dir=tmp_path) as i2c:
        with pytest.raises(HardwareError):
            i2c.read_byte(0x10, 0x01)
    assert (LogLevel.FATAL, "Failed to read from i2c device") in logger.records


def test_sensor_address_is_set_only_when_it_changes(bus_file, tmp_path):
    logger = RecordingLogger()
    with HardwareI2c.create(logger, 2, device_dir=tmp_path) as i2c:
        i2c.write_byte(0x40, 1)
        i2c.write_byte(0x40, 2)
        assert i2c.sensor_address == 0x40
        # A regular file rejects the address ioctl, which is logged once per change.
        failures = [r for r in logger.records if r[1] == "Failed to set sensor address"]
        assert len(failures) == 1
        i2c.write_byte(0x41, 3)
        assert i2c.sensor_address == 0x41
    failures = [r for r in logger.records if r[1] == "Failed to set sensor address"]
    assert len(failures) == 2


def test_out_of_range_byte_is_rejected(bus_file, tmp_path):
    with HardwareI2c.create(RecordingLogger(), 2, device_dir=tmp_path) as i2c:
        with pytest.raises(ValueError):
            i2c.write_byte(0x40, 256)
    assert bus_file.read_bytes() == b""


def test_use_after_close_is_an_error(bus_file, tmp_path):
    i2c = HardwareI2c.create(RecordingLogger(), 2, device_dir=tmp_path)
    i2c.close()
    with pytest.raises(HardwareError):
        i2c.write_byte(0x40, 1)