"""Interpreting error and warning codes reported by the motor controller."""

from __future__ import annotations

from enum import Enum

from hyped.core.logger import BaseLogger, LogLevel


class ControllerStatus(Enum):
    """Most severe condition found in a warning report."""

    CONTROLLER_TEMPERATURE_EXCEEDED = "controller_temperature_exceeded"
    UNRECOVERABLE_WARNING = "unrecoverable_warning"
    NOMINAL = "nominal"


_ERROR_MESSAGES = {
    0xFF01: "ERROR_CURRENT_A: Current phase A hall sensor missing or damaged",
    0xFF02: "ERROR_CURRENT_B: Current phase A hall sensor missing or damaged",
    0xFF03: "ERROR_HS_FET: High side Fet short circuit",
    0xFF04: "ERROR_LS_FET: Low side Fet short circuit",
    0xFF05: "ERROR_DRV_LS_L1: Low side Fet phase 1 short circuit",
    0xFF06: "ERROR_DRV_LS_L2: Low side Fet phase 2 short circuit",
    0xFF07: "ERROR_DRV_LS_L3: Low side Fet phase 3 short circuit",
    0xFF08: "ERROR_DRV_HS_L1: High side Fet phase 1 short circuit",
    0xFF09: "ERROR_DRV_HS_L2: High side Fet phase 2 short circuit",
    0xFF0A: "ERROR_DRV_HS_L3: High side Fet phase 3 short circuit ",
    0xFF0B: "ERROR_MOTOR_FEEDBACK: Wrong feedback selected (check feedback type)",
    0xFF0C: "ERROR_DC_LINK_UNDERVOLTAGE: DC voltage not applied to bridge or too low",
    0xFF0D: "ERROR_PULS_MODE_FINISHED: Pulse mode finished",
    0xFF0E: "ERROR_APP_ERROR",
    0xFF0F: "ERROR_EMERGENCY_BUTTON: Emergency button pressed",
    0xFF10: "ERROR_CONTROLLER_OVERTEMPERATURE: Controller overtemperature",
    0x3210: "ERROR_DC_LINK_OVERVOLTAGE: Power supply voltage too high",
}

# (bit, level, message, resulting status), checked in order; later bits take precedence.
_WARNINGS = (
    (0x1, LogLevel.INFO, "Controller Temperature Exceeded",
     ControllerStatus.CONTROLLER_TEMPERATURE_EXCEEDED),
    (0x2, LogLevel.FATAL, "Motor Temperature Exceeded", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x4, LogLevel.FATAL, "DC link under voltage", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x8, LogLevel.FATAL, "DC link over voltage", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x10, LogLevel.FATAL, "DC link over current", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x20, LogLevel.FATAL, "Stall protection active", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x40, LogLevel.FATAL, "Max velocity exceeded", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x80, LogLevel.FATAL, "BMS Proposed Power", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x100, LogLevel.FATAL, "Capacitor temperature exceeded",
     ControllerStatus.UNRECOVERABLE_WARNING),
    (0x200, LogLevel.FATAL, "I2T protection", ControllerStatus.UNRECOVERABLE_WARNING),
    (0x400, LogLevel.FATAL, "Field weakening active", ControllerStatus.UNRECOVERABLE_WARNING),
)


class Controller:
    """Logs what the motor controller's error and warning codes mean."""

    def __init__(self, logger: BaseLogger) -> None:
        self._logger = logger

    def process_error_message(self, error_code: int) -> None:
        """Log the meaning of ``error_code`` as a fatal message."""
        message = _ERROR_MESSAGES.get(error_code)
        if message is None:
            self._logger.log(
                LogLevel.FATAL,
                "GENERIC_ERROR: Unspecific error occurred with code %i",
                error_code,
            )
        else:
            self._logger.log(LogLevel.FATAL, message)

    def process_warning_message(self, warning_code: int) -> ControllerStatus:
        """Log every warning flagged in ``warning_code`` and return the resulting status."""
        if warning_code < 0:
            raise ValueError(f"warning code must not be negative: {warning_code}")
        status = ControllerStatus.NOMINAL
        if warning_code == 0:
            return status
        self._logger.log(LogLevel.INFO, "Controller Warning found, (code: %x)", warning_code)
        for bit, level, description, bit_status in _WARNINGS:
            if warning_code & bit:
                self._logger.log(level, "Controller Warning: %s", description)
                status = bit_status
        return status