# hyped

Building blocks for the control software of a pod:

- `hyped.core` — a timestamped logger (`Logger`, `LogLevel`, `BaseLogger`),
  time sources (`TimeSource`, `WallClock`), a `Timer` that measures how long
  a task runs, and shared types such as `DigitalSignal`, `Trajectory`,
  `CanFrame` and the `HardwareError` exception.
- `hyped.io` — abstract `Gpio`, `GpioReader`, `GpioWriter`, `I2c` and `Spi`
  interfaces, plus Linux implementations backed by sysfs and device files:
  `HardwareGpio`, `HardwareI2c`, `HardwareSpi` and `Adc`.
- `hyped.sensors` — `MuxSensor` and `Mux`, which reads every sensor behind an
  I2C multiplexer.
- `hyped.navigation` — the `Navigator` interface, `SensorChecks`, track
  constants and a numpy-based `KalmanFilter`.
- `hyped.motors` — `Controller`, which turns motor controller error and
  warning codes into log messages and a `ControllerStatus`.
- `hyped.utils` — stand-ins for tests and development without hardware:
  `ManualTime`, `DummyGpio`, `DummyI2c`, `DummyI2cSensor`, `DummyLogger` and
  `NaiveNavigator`.
- `hyped.debug` — an interactive `Repl` for poking at ADC pins and I2C/SPI
  buses, started by the `hyped-debugger` command.

Failed hardware operations raise `hyped.core.types.HardwareError`.

## Installation

```
pip install .
```

Python 3.10 or later is required. To run the test suite:

```
pip install ".[test]"
pytest
```

## Logging with a controllable clock

```python
from hyped.core.logger import Logger, LogLevel
from hyped.utils.manual_time import ManualTime

clock = ManualTime()
clock.set_seconds_since_epoch(60)

logger = Logger("demo", LogLevel.DEBUG, clock)
logger.log(LogLevel.INFO, "sensor %d ready", 3)
```

Each line starts with the clock's time converted to the local time zone,
to the millisecond, then the level and the label; with the local zone set
to UTC the line above is `00:01:00.000 INFO[demo] sensor 3 ready`.
`DEBUG` and `INFO` messages go to standard output, `FATAL` ones to standard
error. Messages below the logger's own level are dropped, and a logger at
`LogLevel.NONE` prints nothing.

## GPIO without hardware

```python
from hyped.core.types import DigitalSignal
from hyped.utils.dummy_gpio import DummyGpio

gpio = DummyGpio(
    lambda pin: DigitalSignal.HIGH,
    lambda pin, state: print(f"pin {pin} -> {state.name}"),
)
assert gpio.get_reader(4).read() is DigitalSignal.HIGH
gpio.get_writer(4).write(DigitalSignal.LOW)   # prints "pin 4 -> LOW"
```

A read handler that returns `None` makes `read()` raise `HardwareError`.

## Hardware access

`Adc.create(logger, pin)`, `HardwareI2c.create(logger, bus_address)`,
`HardwareSpi.create(logger, ...)` and `HardwareGpio(logger)` open the Linux
interfaces under `/sys/bus/iio/devices/iio:device0`, `/dev` and
`/sys/class/gpio`; `Adc`, `HardwareI2c` and `HardwareGpio` take another
directory as `root` or `device_dir`. `Adc`, `HardwareI2c`, `HardwareSpi` and
the GPIO readers and writers have `close()` and work as context managers.

`Mux(logger, i2c, mux_address, sensors).read_all_channels()` selects each
sensor's channel in turn and returns the readings in order, with `None` for a
sensor that could not be configured or read. It raises `HardwareError` if a
channel cannot be selected or closed, or if more than a quarter of the
sensors are unusable.

## Navigation

```python
from hyped.utils.naive_navigator import NaiveNavigator

navigator = NaiveNavigator()
navigator.encoder_update([1, 2, 3, 4])
navigator.imu_update([[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]])
print(navigator.current_trajectory())
# Trajectory(displacement=2.5, velocity=0.0, acceleration=19.5)
```

`KalmanFilter.filter(...)` predicts with the transition model and corrects the
state estimate with a measurement. It updates only `state_estimate`;
`error_covariance` keeps the value the filter was created with.

## The debugger

`hyped-debugger` starts an interactive shell for the pod's hardware. It takes
one argument, a JSON configuration file naming the peripherals to expose:

```json
{
  "debugger": {
    "io": {
      "adc": {"enabled": true, "pins": [0, 1]},
      "i2c": {"enabled": true, "buses": [2]},
      "spi": {"enabled": false}
    }
  }
}
```

```
hyped-debugger config.json
```

At the `>` prompt, `help` lists the available commands and `quit` leaves the
shell, as does the end of input. Depending on the configuration there are
`adc <pin> read`, `i2c <bus> read`, `i2c <bus> write`, `spi <bus> read byte`
and `spi <bus> write byte`; addresses and data are asked for in hexadecimal.
The SPI commands always open the default bus device, `/dev/spidev1.0`,
whatever bus number is configured. A peripheral that cannot be opened is
logged and its commands are left out. Without a configuration file, or with
one that cannot be read or lacks a required field, the command reports the
problem and exits with status 1.

## What is not included

There is no motor control loop and no CAN bus communication: `CanFrame` is a
value type only, and `Controller` only interprets codes it is given. The only
working `Navigator` is `NaiveNavigator`, which averages readings; there is no
sensor cross-checking or outlier handling.