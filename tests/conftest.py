import pytest
from w1temp.sensors import SensorHandle

READY = "72 01 4b 46 7f ff 0e 10 57 : crc=57 YES"
NOT_READY = "72 01 4b 46 7f ff 0e 10 57 : crc=00 NO"

def w1_text(status: str, data: str) -> str:
    return f"{status}\n{data}\n"

@pytest.fixture
def write_sensor(tmp_path):
    """Write w1_slave content under tmp_path/<device>/ and return its handle."""
    def _write(content: str, device: str = "28-0316a2799aff") -> SensorHandle:
        d = tmp_path / device
        d.mkdir(exist_ok=True)
        f = d / "w1_slave"
        f.write_text(content)
        return SensorHandle(f)
    return _write
