"""An interactive console for poking at the pod's peripherals."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from hyped.core.logger import BaseLogger, LogLevel
from hyped.core.types import HardwareError
from hyped.io.adc import Adc
from hyped.io.hardware_i2c import HardwareI2c
from hyped.io.hardware_spi import HardwareSpi


@dataclass(frozen=True)
class Command:
    """A named action the console can run."""

    name: str
    description: str
    handler: Callable[[], None]


class Repl:
    """Reads command names line by line and runs the matching handler."""

    def __init__(
        self,
        logger: BaseLogger,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._logger = logger
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._commands: dict[str, Command] = {}
        self._running = False

    def run(self) -> None:
        """Handle commands until ``quit`` is given or the input runs out."""
        self._running = True
        while self._running:
            if not self.handle_command():
                break
        self._running = False

    def from_file(self, path: str | Path) -> Repl:
        """Build a console whose commands are described by the JSON file at ``path``.

        Raises OSError if the file cannot be opened and ValueError if it is not
        valid JSON or lacks a required field.
        """
        try:
            with open(path, encoding="utf-8") as file:
                text = file.read()
        except OSError:
            self._logger.log(LogLevel.FATAL, "Failed to open file %s", str(path))
            raise
        try:
            document = json.loads(text)
        except json.JSONDecodeError as error:
            self._logger.log(LogLevel.FATAL, "Error parsing JSON: %s", str(error))
            raise ValueError(f"error parsing JSON: {error}") from error

        debugger = self._section(
            document,
            "debugger",
            "Missing required field 'debugger' in configuration file at %s",
            str(path),
        )
        repl = Repl(self._logger, self._stdin, self._stdout)
        repl._add_help_command()
        repl._add_quit_command()

        io = self._section(
            debugger,
            "io",
            "Missing required field 'debugger.io' in configuration file at %s",
            str(path),
        )

        adc = self._section(io, "adc", "Missing required field 'io.adc' in configuration file")
        if self._flag(adc, "adc"):
            pins = self._field(adc, "pins", "Missing required field 'io.adc.pins' in configuration file")
            for pin in self._numbers(pins, "io.adc.pins"):
                repl._add_adc_commands(pin)

        i2c = self._section(io, "i2c", "Missing required field 'io.i2c' in configuration file")
        if self._flag(i2c, "i2c"):
            self._field(i2c, "buses", "Missing required field 'io.i2c.buses' in configuration file")
        # Listed I2C buses are set up even when the section is disabled.
        for bus in self._numbers(i2c.get("buses", []), "io.i2c.buses"):
            repl._add_i2c_commands(bus)

        spi = self._section(io, "spi", "Missing required field 'io.spi' in configuration file")
        if self._flag(spi, "spi"):
            buses = self._field(spi, "buses", "Missing required field 'io.spi.buses' in configuration file")
            for bus in self._numbers(buses, "io.spi.buses"):
                repl._add_spi_commands(bus)
        return repl

    def add_command(self, command: Command) -> None:
        """Register ``command``; a name already in use keeps its first command."""
        self._commands.setdefault(command.name, command)
        self._logger.log(LogLevel.DEBUG, "Added command: %s", command.name)

    def print_commands(self) -> None:
        """Log every command with its description, in name order."""
        self._logger.log(LogLevel.INFO, "Available commands:")
        for name in sorted(self._commands):
            self._logger.log(LogLevel.INFO, "  %s: %s", name, self._commands[name].description)

    def handle_command(self) -> bool:
        """Prompt for one command and run it; return False once the input is exhausted."""
        self._stdout.write("> ")
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            return False
        name = line[:-1] if line.endswith("\n") else line
        command = self._commands.get(name)
        if command is None:
            self._logger.log(LogLevel.FATAL, "Unknown command: %s", name)
            return True
        command.handler()
        return True

    def _fail(self, message: str, *args: object) -> ValueError:
        self._logger.log(LogLevel.FATAL, message, *args)
        return ValueError(message % args if args else message)

    def _field(self, section: Mapping[str, Any], key: str, message: str, *args: object) -> Any:
        if not isinstance(section, Mapping) or key not in section:
            raise self._fail(message, *args)
        return section[key]

    def _section(
        self, section: Mapping[str, Any], key: str, message: str, *args: object
    ) -> Mapping[str, Any]:
        value = self._field(section, key, message, *args)
        if not isinstance(value, Mapping):
            raise self._fail("Field '%s' in configuration file must be an object", key)
        return value

    def _flag(self, section: Mapping[str, Any], name: str) -> bool:
        enabled = self._field(
            section, "enabled", "Missing required field 'io.%s.enabled' in configuration file", name
        )
        if not isinstance(enabled, bool):
            raise self._fail("Field 'io.%s.enabled' in configuration file must be a boolean", name)
        return enabled

    def _numbers(self, values: Any, name: str) -> list[int]:
        if not isinstance(values, list) or not all(
            isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF
            for value in values
        ):
            raise self._fail("Field '%s' in configuration file must list numbers in [0, 255]", name)
        return values

    def _prompt_hex(self, prompt: str) -> int:
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            raise ValueError("no input given")
        return int(line.strip(), 16)

    def _add_quit_command(self) -> None:
        def stop() -> None:
            self._running = False

        self.add_command(Command("quit", "Quit the REPL", stop))

    def _add_help_command(self) -> None:
        self.add_command(Command("help", "Print this help message", self.print_commands))

    def _add_adc_commands(self, pin: int) -> None:
        try:
            adc = Adc.create(self._logger, pin)
        except HardwareError:
            self._logger.log(LogLevel.FATAL, "Failed to create ADC instance on pin %d", pin)
            return

        def read() -> None:
            try:
                value = adc.read_value()
            except HardwareError:
                self._logger.log(LogLevel.FATAL, "Failed to read from ADC pin %d", pin)
                return
            self._logger.log(LogLevel.INFO, "ADC value from pin %d: %d", pin, value)

        self.add_command(Command(f"adc {pin} read", f"Read from ADC pin {pin}", read))

    def _add_i2c_commands(self, bus: int) -> None:
        try:
            i2c = HardwareI2c.create(self._logger, bus)
        except HardwareError:
            self._logger.log(LogLevel.FATAL, "Failed to create I2C instance on bus %d", bus)
            return

        def read() -> None:
            try:
                device_address = self._prompt_hex("Device address: ")
                register_address = self._prompt_hex("Register address: ")
                value = i2c.read_byte(device_address, register_address)
            except ValueError as error:
                self._logger.log(LogLevel.FATAL, "Invalid input: %s", str(error))
                return
            except HardwareError:
                self._logger.log(LogLevel.FATAL, "Failed to read from I2C bus %d", bus)
                return
            self._logger.log(LogLevel.INFO, "I2C value from bus %d: %d", bus, value)

        def write() -> None:
            try:
                device_address = self._prompt_hex("Device address: ")
                register_address = self._prompt_hex("Register address: ")
                data = self._prompt_hex("Data: ")
                i2c.write_byte_to_register(device_address, register_address, data)
            except ValueError as error:
                self._logger.log(LogLevel.FATAL, "Invalid input: %s", str(error))
                return
            except HardwareError:
                self._logger.log(LogLevel.FATAL, "Failed to write to I2C bus: %d", bus)
                return
            self._logger.log(
                LogLevel.INFO, "I2C write successful to device %d on %d", device_address, bus
            )

        self.add_command(Command(f"i2c {bus} read", f"Read from I2C bus {bus}", read))
        self.add_command(Command(f"i2c {bus} write", f"Write to I2C bus {bus}", write))

    def _add_spi_commands(self, bus: int) -> None:
        try:
            spi = HardwareSpi.create(self._logger)
        except HardwareError:
            self._logger.log(LogLevel.FATAL, "Failed to create SPI instance on bus %d", bus)
            return

        def read() -> None:
            try:
                register_address = self._prompt_hex("Register address: ")
                data = spi.read(register_address, 1)
            except ValueError as error:
                self._logger.log(LogLevel.FATAL, "Invalid input: %s", str(error))
                return
            except HardwareError:
                self._logger.log(LogLevel.FATAL, "Failed to read from SPI bus %d", bus)
                return
            self._logger.log(LogLevel.INFO, "SPI value from bus %d: %d", bus, data[0])

        def write() -> None:
            try:
                register_address = self._prompt_hex("Register address: ")
                data = self._prompt_hex("Data: ")
                spi.write(register_address, bytes([data & 0xFF]))
            except ValueError as error:
                self._logger.log(LogLevel.FATAL, "Invalid input: %s", str(error))
                return
            except HardwareError:
                self._logger.log(LogLevel.FATAL, "Failed to write to SPI bus: %d", bus)
                return
            self._logger.log(
                LogLevel.INFO, "Successful SPI write to device %d on %d", register_address, bus
            )

        self.add_command(Command(f"spi {bus} read byte", f"Read from SPI bus {bus}", read))
        self.add_command(Command(f"spi {bus} write byte", f"Write to SPI bus {bus}", write))