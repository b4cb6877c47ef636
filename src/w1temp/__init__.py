"""Read a one-wire DS18B20 sensor from sysfs and stream changed temperatures."""
from w1temp.errors import ReadFailure, IOFailure, NotReady, MalformedData, DiscoveryError, ConfigError
from w1temp.sensors import SensorHandle, TemperatureSensor, W1ThermSensor, MockSensor, read_temperature
from w1temp.watcher import ChangeEvent, Watcher, watch
from w1temp.discovery import discover, require_single

__all__ = [
    "ReadFailure", "IOFailure", "NotReady", "MalformedData", "DiscoveryError", "ConfigError",
    "SensorHandle", "TemperatureSensor", "W1ThermSensor", "MockSensor", "read_temperature",
    "ChangeEvent", "Watcher", "watch",
    "discover", "require_single",
]
