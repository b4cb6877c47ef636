import pytest
from w1temp.config import AppConfig
from w1temp.errors import ConfigError
from w1temp.runtime import load_config

def test_defaults():
    cfg = AppConfig()
    assert cfg.sensor.kind == "w1"
    assert cfg.sensor.devices_dir == "/sys/bus/w1/devices"
    assert cfg.sensor.family_prefix == "28-"
    assert cfg.sensor.unit == "F"
    assert cfg.watch.interval_s == 1.0
    assert cfg.watch.overflow == "block"

def test_load_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("sensor:\n  unit: C\n  kind: mock\nwatch:\n  interval_s: 2.5\n  overflow: drop_oldest\n")
    cfg = load_config(str(p))
    assert cfg.sensor.unit == "C"
    assert cfg.sensor.kind == "mock"
    assert cfg.watch.interval_s == 2.5
    assert cfg.watch.overflow == "drop_oldest"
    assert cfg.logging.level == "INFO"

def test_empty_yaml_is_defaults(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("")
    assert load_config(str(p)) == AppConfig()

def test_missing_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(str(tmp_path / "absent.yaml")) == AppConfig()

def test_search_path(tmp_path, monkeypatch):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yaml").write_text("watch:\n  queue_size: 3\n")
    monkeypatch.chdir(tmp_path)
    assert load_config().watch.queue_size == 3

@pytest.mark.parametrize("text", [
    "watch:\n  interval_s: 0\n",
    "sensor:\n  unit: K\n",
    "watch: [unclosed\n",
])
def test_invalid_config(tmp_path, text):
    p = tmp_path / "config.yaml"
    p.write_text(text)
    with pytest.raises(ConfigError):
        load_config(str(p))
