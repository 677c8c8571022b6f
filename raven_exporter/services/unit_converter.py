# raven_exporter/services/unit_converter.py

from raven_exporter.errors import DivisionError


def convert(raw: int, multiplier: int, divisor: int) -> int:
    """
    Scale a raw meter reading to watts (demand) or watt-hours (summation).

    The device reports kW / kWh as raw * multiplier / divisor. Everything is
    multiplied first and divided once, truncating, so sub-unit precision is
    dropped the same way the meter's own display does.
    """
    if divisor == 0:
        raise DivisionError(
            f"zero divisor (raw={raw}, multiplier={multiplier})"
        )
    return raw * multiplier * 1000 // divisor
