from __future__ import annotations
import logging
from pathlib import Path
from typing import Sequence

from w1temp.errors import DiscoveryError
from w1temp.sensors import SensorHandle

log = logging.getLogger(__name__)

DEVICES_DIR = "/sys/bus/w1/devices"
FAMILY_PREFIX = "28-"
DATA_FILE = "w1_slave"


def discover(devices_dir: str | Path = DEVICES_DIR,
             family_prefix: str = FAMILY_PREFIX,
             data_file: str = DATA_FILE) -> list[SensorHandle]:
    """
    List sensors under the w1 devices directory.
    Only entries named <family_prefix>* that contain <data_file> are returned, sorted by name.
    """
    base = Path(devices_dir)
    try:
        entries = sorted(base.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise DiscoveryError(f"cannot list {base}: {e}") from e
    handles = []
    for entry in entries:
        if not entry.name.startswith(family_prefix):
            continue
        src = entry / data_file
        if not src.exists():
            log.debug("Skipping %s: no %s", entry.name, data_file)
            continue
        handles.append(SensorHandle(src))
    log.info("Found %d temp sensor(s) in %s", len(handles), base)
    return handles


def require_single(handles: Sequence[SensorHandle]) -> SensorHandle:
    if not handles:
        raise DiscoveryError("no sensors found")
    if len(handles) > 1:
        raise DiscoveryError(f"multiple sensors not supported ({', '.join(h.device_id for h in handles)})")
    return handles[0]
