from __future__ import annotations
import logging
import random
import re
from dataclasses import dataclass
from pathlib import Path

from w1temp.config import Unit
from w1temp.errors import IOFailure, NotReady, MalformedData

log = logging.getLogger(__name__)

_DATA_LINE = re.compile(r"^.*t=(-?[0-9]*)$")
_READY_FLAG = "YES"


@dataclass(frozen=True)
class SensorHandle:
    """Path to one sensor's raw-data file, e.g. /sys/bus/w1/devices/28-0316a2799aff/w1_slave."""
    path: Path

    @property
    def device_id(self) -> str:
        return self.path.parent.name

    def __str__(self) -> str:
        return str(self.path)


def c_to_f(c: float) -> float:
    return (c * 9.0 / 5.0) + 32.0


def convert(celsius: float, unit: Unit = "F") -> float:
    if unit == "F":
        return c_to_f(celsius)
    if unit == "C":
        return celsius
    raise ValueError(f"unknown unit: {unit!r}")


def parse_reading(text: str) -> float:
    """
    Parse w1_slave output into millidegrees Celsius.

    Expected shape (blank lines are ignored):
        72 01 4b 46 7f ff 0e 10 57 : crc=57 YES
        72 01 4b 46 7f ff 0e 10 57 t=23125

    Raises NotReady when the CRC line does not end in YES, MalformedData for
    anything else that does not fit.
    """
    lines = [l for l in text.split("\n") if l]
    if not lines:
        raise MalformedData("expected 2 data lines, got 0", line_count=0)
    if not lines[0].endswith(_READY_FLAG):
        raise NotReady("not ready to read")
    if len(lines) != 2:
        raise MalformedData(f"expected 2 data lines, got {len(lines)}", line_count=len(lines))
    m = _DATA_LINE.match(lines[1])
    if m is None:
        raise MalformedData("invalid data line")
    token = m.group(1)
    try:
        return float(token)
    except ValueError:
        raise MalformedData(f"invalid data value: {token!r}") from None


def read_temperature(handle: SensorHandle, unit: Unit = "F") -> float:
    """Single read of the sensor file, converted to `unit`. No retries."""
    try:
        raw = handle.path.read_bytes()
    except OSError as e:
        raise IOFailure(f"cannot read {handle.path}: {e}") from e
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise MalformedData(f"undecodable sensor output: {raw[:32]!r}") from e
    value = convert(parse_reading(text) / 1000.0, unit)
    log.debug("%s: %.3f%s", handle.device_id, value, unit)
    return value


class TemperatureSensor:
    unit: Unit = "F"

    def read(self) -> float:
        raise NotImplementedError


class W1ThermSensor(TemperatureSensor):
    """DS18B20 behind the w1-therm kernel driver. Enable 1-Wire in raspi-config first."""
    def __init__(self, handle: SensorHandle, unit: Unit = "F"):
        self.handle = handle
        self.unit = unit

    def read(self) -> float:
        return read_temperature(self.handle, self.unit)

    def __repr__(self) -> str:
        return f"W1ThermSensor({self.handle.device_id!r}, unit={self.unit!r})"


class MockSensor(TemperatureSensor):
    def __init__(self, start_c: float = 22.0, unit: Unit = "F"):
        self.t = start_c
        self.unit = unit

    def read(self) -> float:
        # Small random walk to simulate environment
        self.t += random.uniform(-0.05, 0.05)
        return round(convert(self.t, self.unit), 2)
