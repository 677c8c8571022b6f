import pytest

from raven_exporter.config import AppConfig, Config

CONF = """
[serial]
port = /dev/ttyUSB0
baudrate = 57600

[http]
host = 0.0.0.0
port = 9100   # node-exporter style
path = /raven

[logging]
console_level = debug
console_quiet = true
debug_modules = raven.scanner, raven.http
"""


def test_load_full_config(tmp_path):
    conf_path = tmp_path / "raven.conf"
    conf_path.write_text(CONF)
    cfg = Config.load(str(conf_path))
    assert cfg.serial.port == "/dev/ttyUSB0"
    assert cfg.serial.baudrate == 57600
    assert (cfg.http.host, cfg.http.port, cfg.http.path) == ("0.0.0.0", 9100, "/raven")
    assert cfg.logging.console_level == "debug"
    assert cfg.logging.console_quiet is True
    assert cfg.logging.debug_modules == ["raven.scanner", "raven.http"]


def test_missing_sections_use_defaults(tmp_path):
    conf_path = tmp_path / "raven.conf"
    conf_path.write_text("[serial]\nport = COM4\n")
    cfg = Config.load(str(conf_path))
    assert cfg.serial.baudrate == 115200
    assert (cfg.http.host, cfg.http.port, cfg.http.path) == ("localhost", 2112, "/metrics")
    assert cfg.logging.console_level == "INFO"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(str(tmp_path / "nope.conf"))


@pytest.mark.parametrize(
    "body",
    [
        "[http]\nport = abc\n",
        "[http]\nport = 70000\n",
        "[http]\npath = metrics\n",
        "[serial]\nbaudrate = fast\n",
    ],
)
def test_invalid_values_raise(tmp_path, body):
    conf_path = tmp_path / "raven.conf"
    conf_path.write_text(body)
    with pytest.raises(ValueError):
        Config.load(str(conf_path))


def test_overrides_win():
    cfg = AppConfig.defaults().apply_overrides(
        serial_port="/dev/ttyACM0",
        http_host="127.0.0.1",
        http_port=0,
        metrics_path="/m",
    )
    assert cfg.serial.port == "/dev/ttyACM0"
    assert (cfg.http.host, cfg.http.port, cfg.http.path) == ("127.0.0.1", 0, "/m")


def test_overrides_leave_unset_values():
    cfg = AppConfig.defaults().apply_overrides(serial_port="COM4")
    assert cfg.http.port == 2112
    assert cfg.http.path == "/metrics"
