from pydantic import BaseModel, Field
from typing import Literal, Optional

Unit = Literal["F", "C"]
Overflow = Literal["block", "drop_oldest", "drop_newest"]

class Sensor(BaseModel):
    kind: Literal["w1", "mock"] = "w1"
    devices_dir: str = "/sys/bus/w1/devices"
    family_prefix: str = "28-"   # DS18B20 family code
    data_file: str = "w1_slave"
    device_id: Optional[str] = None  # pin one device, skip the single-sensor check
    unit: Unit = "F"

class Watch(BaseModel):
    interval_s: float = Field(default=1.0, gt=0)
    queue_size: int = Field(default=16, ge=1)
    overflow: Overflow = "block"

class LoggingSettings(BaseModel):
    enabled: bool = True
    level: str = "INFO"
    file: Optional[str] = None

class AppConfig(BaseModel):
    sensor: Sensor = Field(default_factory=Sensor)
    watch: Watch = Field(default_factory=Watch)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
