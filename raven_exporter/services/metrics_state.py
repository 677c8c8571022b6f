# raven_exporter/services/metrics_state.py

from __future__ import annotations

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge

METER_LABELS = ("device_mac_id", "meter_mac_id")
MESSAGE_LABELS = METER_LABELS + ("message_type",)


class MetricsState:
    """
    Live metric values for every meter seen on the stream.

    Owns its own CollectorRegistry so tests (and anything else embedding the
    exporter) never share series through prometheus_client's global registry.
    Label sets are never removed once created.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.demand = Gauge(
            "demand_watts",
            "Current demand in watts",
            METER_LABELS,
            registry=self.registry,
        )
        # Name kept as exported by earlier versions; dashboards depend on it.
        self.delivered = Gauge(
            "delievered_watthours",
            "Current meter reading in watt hours",
            METER_LABELS,
            registry=self.registry,
        )
        # prometheus_client always appends _total to counters, so this series
        # is scraped as messages_count_total.
        self.messages = Counter(
            "messages_count",
            "Number of messages received (exported as messages_count_total)",
            MESSAGE_LABELS,
            registry=self.registry,
        )
        self.last_seen = Gauge(
            "last_message_received",
            "Timestamp of last message received",
            MESSAGE_LABELS,
            registry=self.registry,
        )

    # ------------------------------------------------------------------
    def set_demand(self, device_mac_id: str, meter_mac_id: str, watts: int) -> None:
        self.demand.labels(device_mac_id, meter_mac_id).set(watts)

    def set_delivered(self, device_mac_id: str, meter_mac_id: str, watt_hours: int) -> None:
        self.delivered.labels(device_mac_id, meter_mac_id).set(watt_hours)

    def increment_message_count(self, device_mac_id: str, meter_mac_id: str, kind: str) -> None:
        self.messages.labels(device_mac_id, meter_mac_id, kind).inc()

    def touch_last_seen(self, device_mac_id: str, meter_mac_id: str, kind: str) -> None:
        self.last_seen.labels(device_mac_id, meter_mac_id, kind).set_to_current_time()

    # ------------------------------------------------------------------
    def sample(self, name: str, **labels: str) -> Optional[float]:
        """Read back a single sample, e.g. sample("demand_watts", device_mac_id=..., meter_mac_id=...)."""
        return self.registry.get_sample_value(name, labels)
