import pytest
import serial

from raven_exporter.config import SerialConfig
from raven_exporter.errors import StreamFault
from raven_exporter.logging import get_logger
from raven_exporter.services import serial_transport


def test_open_serial_port_uses_8n1_blocking(monkeypatch):
    captured = {}

    class DummySerial:
        def __init__(self, **kwargs):
            captured.update(kwargs)

    monkeypatch.setattr(serial_transport.serial, "Serial", DummySerial)
    port = serial_transport.open_serial_port(SerialConfig(port="COM4"), get_logger("test"))

    assert isinstance(port, DummySerial)
    assert captured["port"] == "COM4"
    assert captured["baudrate"] == 115200
    assert captured["bytesize"] == serial.EIGHTBITS
    assert captured["parity"] == serial.PARITY_NONE
    assert captured["stopbits"] == serial.STOPBITS_ONE
    assert captured["timeout"] is None


def test_open_serial_port_failure_is_stream_fault(monkeypatch):
    def fail(**kwargs):
        raise serial.SerialException("could not open port COM99")

    monkeypatch.setattr(serial_transport.serial, "Serial", fail)
    with pytest.raises(StreamFault, match="COM99"):
        serial_transport.open_serial_port(SerialConfig(port="COM99"), get_logger("test"))
