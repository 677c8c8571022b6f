# raven_exporter/services/dispatch_loop.py

from __future__ import annotations

import enum
import logging
from typing import Optional

from raven_exporter.errors import RavenError
from raven_exporter.models.messages import RavenMessage
from raven_exporter.services.metrics_state import MetricsState
from raven_exporter.services.record_decoder import decode
from raven_exporter.services.stream_scanner import StreamScanner
from raven_exporter.services.unit_converter import convert


class LoopState(enum.Enum):
    AWAITING_MESSAGE = "awaiting_message"
    FATAL = "fatal"
    STOPPED = "stopped"


class DispatchLoop:
    """
    Routes framed messages into MetricsState.

    Any decode, conversion or stream fault is final: the loop moves to FATAL
    and re-raises for main() to report. There is no resync point on the wire
    that would make skipping a bad message safe.
    """

    def __init__(
        self,
        scanner: StreamScanner,
        metrics: MetricsState,
        log: Optional[logging.Logger] = None,
    ):
        self.scanner = scanner
        self.metrics = metrics
        self.log = log or logging.getLogger("raven.dispatch")
        self.state = LoopState.AWAITING_MESSAGE
        self.processed = 0

    # ------------------------------------------------------------------
    def handle(self, message: RavenMessage) -> int:
        reading = decode(message)
        value = convert(reading.raw, reading.multiplier, reading.divisor)

        device, meter = reading.device_mac_id, reading.meter_mac_id
        if reading.kind == "demand":
            self.log.info("Demand for %s: %d watts", meter, value)
            self.metrics.set_demand(device, meter, value)
        else:
            self.log.info("Total delivered for %s: %d watt-hours", meter, value)
            self.metrics.set_delivered(device, meter, value)

        self.metrics.increment_message_count(device, meter, reading.kind)
        self.metrics.touch_last_seen(device, meter, reading.kind)
        self.processed += 1
        return value

    # ------------------------------------------------------------------
    def run(self) -> int:
        """Process messages until the stream closes; returns how many were handled."""
        try:
            for message in self.scanner:
                self.handle(message)
        except RavenError:
            self.state = LoopState.FATAL
            raise
        except KeyboardInterrupt:
            self.state = LoopState.STOPPED
            raise

        self.log.info("Stream closed after %d messages", self.processed)
        self.state = LoopState.STOPPED
        return self.processed
