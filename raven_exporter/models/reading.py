# raven_exporter/models/reading.py
from dataclasses import dataclass


@dataclass(frozen=True)
class DecodedReading:
    kind: str             # "demand" or "summation"
    device_mac_id: str
    meter_mac_id: str
    raw: int
    multiplier: int
    divisor: int
