# raven_exporter/services/serial_transport.py

from __future__ import annotations

import serial

from raven_exporter.config import SerialConfig
from raven_exporter.errors import StreamFault


def open_serial_port(cfg: SerialConfig, log) -> serial.Serial:
    """
    Open the RAVEn USB serial device: 8N1, no read timeout.

    Reads block for as long as the device stays silent.
    """
    log.debug("Opening %s at %d baud", cfg.port, cfg.baudrate)
    try:
        port = serial.Serial(
            port=cfg.port,
            baudrate=cfg.baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=None,
        )
    except serial.SerialException as exc:
        raise StreamFault(f"error opening serial port {cfg.port}: {exc}") from exc

    log.info("Connected to serial port %s", cfg.port)
    return port
