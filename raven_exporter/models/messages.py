# raven_exporter/models/messages.py
from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class InstantaneousDemand:
    device_mac_id: str
    meter_mac_id: str
    demand: str           # hex text, e.g. "0x00012c"
    multiplier: str
    divisor: str

    kind: ClassVar[str] = "demand"
    tag: ClassVar[str] = "InstantaneousDemand"
    fields: ClassVar[dict[str, str]] = {
        "device_mac_id": "DeviceMacId",
        "meter_mac_id": "MeterMacId",
        "demand": "Demand",
        "multiplier": "Multiplier",
        "divisor": "Divisor",
    }


@dataclass(frozen=True)
class CurrentSummationDelivered:
    device_mac_id: str
    meter_mac_id: str
    summation_delivered: str
    multiplier: str
    divisor: str

    kind: ClassVar[str] = "summation"
    tag: ClassVar[str] = "CurrentSummationDelivered"
    fields: ClassVar[dict[str, str]] = {
        "device_mac_id": "DeviceMacId",
        "meter_mac_id": "MeterMacId",
        "summation_delivered": "SummationDelivered",
        "multiplier": "Multiplier",
        "divisor": "Divisor",
    }


RavenMessage = Union[InstantaneousDemand, CurrentSummationDelivered]

MESSAGE_TYPES: tuple[type, ...] = (InstantaneousDemand, CurrentSummationDelivered)
