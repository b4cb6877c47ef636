from __future__ import annotations
import logging, os, queue, threading
from pathlib import Path
import yaml
from pydantic import ValidationError

from w1temp.config import AppConfig
from w1temp.discovery import discover, require_single
from w1temp.errors import ConfigError, IOFailure, MalformedData, NotReady, ReadFailure
from w1temp.sensors import MockSensor, SensorHandle, TemperatureSensor, W1ThermSensor
from w1temp.watcher import ChangeEvent, Watcher

log = logging.getLogger(__name__)

CONFIG_PATHS = ['config/config.yaml', 'config.yaml']


def load_config(path: str | None = None) -> AppConfig:
    for p in ([path] if path else []) + CONFIG_PATHS:
        if p and os.path.exists(p):
            try:
                with open(p, 'r') as f:
                    return AppConfig.model_validate(yaml.safe_load(f) or {})
            except (yaml.YAMLError, ValidationError) as e:
                raise ConfigError(f"invalid config {p}: {e}") from e
    return AppConfig()


def build_sensor(cfg: AppConfig) -> TemperatureSensor:
    s = cfg.sensor
    if s.kind == 'mock':
        return MockSensor(unit=s.unit)
    if s.device_id:
        handle = SensorHandle(Path(s.devices_dir) / s.device_id / s.data_file)
    else:
        handle = require_single(discover(s.devices_dir, s.family_prefix, s.data_file))
    log.info("Using sensor %s", handle)
    return W1ThermSensor(handle, s.unit)


def build_watcher(cfg: AppConfig) -> Watcher:
    w = cfg.watch
    return Watcher(build_sensor(cfg), w.interval_s, queue_size=w.queue_size, overflow=w.overflow)


def report_change(ev: ChangeEvent) -> None:
    log.info("Sensor reading: %.3f%s", ev.value, ev.unit)


def report_failure(err: ReadFailure) -> None:
    if isinstance(err, NotReady):
        log.debug("Sensor not ready: %s", err)
    elif isinstance(err, IOFailure):
        log.warning("Sensor I/O failure: %s", err)
    elif isinstance(err, MalformedData):
        log.error("Sensor returned malformed data: %s", err)
    else:
        log.error("Sensor failure: %s", err)


def run(watcher: Watcher, stop: threading.Event, poll_s: float = 0.2) -> None:
    """Start `watcher` and log everything it emits until `stop` is set or the watcher dies."""
    watcher.start()
    try:
        while not stop.is_set() and watcher.running:
            handled = False
            try:
                report_change(watcher.get_change(block=False)); handled = True
            except queue.Empty:
                pass
            try:
                report_failure(watcher.get_error(block=False)); handled = True
            except queue.Empty:
                pass
            if not handled:
                stop.wait(poll_s)
    finally:
        watcher.stop()
