# raven_exporter/services/record_decoder.py

from __future__ import annotations

from raven_exporter.errors import ParseError
from raven_exporter.models.messages import (
    CurrentSummationDelivered,
    InstantaneousDemand,
    RavenMessage,
)
from raven_exporter.models.reading import DecodedReading

UINT32_MAX = 0xFFFFFFFF


def parse_uint32(text: str, field: str) -> int:
    """
    Parse one numeric field as the device writes it.

    The RAVEn emits hex text ("0x0000012c"); plain decimal and the other
    base prefixes (0o, 0b, leading-zero octal) are accepted as well. Signs and
    surrounding whitespace are rejected.
    """
    if not text:
        raise ParseError(field, text, "empty value")
    if not text.isascii() or text != text.strip() or text[0] in "+-":
        raise ParseError(field, text, "invalid syntax")

    try:
        if len(text) > 1 and text[0] == "0" and text[1].isdigit():
            value = int(text, 8)
        else:
            value = int(text, 0)
    except ValueError:
        raise ParseError(field, text, "invalid syntax") from None

    if value > UINT32_MAX:
        raise ParseError(field, text, "value out of range")
    return value


def decode(message: RavenMessage) -> DecodedReading:
    """Turn a framed message into integers; nothing is returned unless every field parses."""
    if isinstance(message, InstantaneousDemand):
        raw = parse_uint32(message.demand, "Demand")
    elif isinstance(message, CurrentSummationDelivered):
        raw = parse_uint32(message.summation_delivered, "SummationDelivered")
    else:
        raise TypeError(f"Unsupported message type: {type(message).__name__}")

    return DecodedReading(
        kind=message.kind,
        device_mac_id=message.device_mac_id,
        meter_mac_id=message.meter_mac_id,
        raw=raw,
        multiplier=parse_uint32(message.multiplier, "Multiplier"),
        divisor=parse_uint32(message.divisor, "Divisor"),
    )
