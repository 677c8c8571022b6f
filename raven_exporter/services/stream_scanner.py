# raven_exporter/services/stream_scanner.py

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import deque
from typing import Any, Iterable, Iterator, Optional

from raven_exporter.errors import StreamFault
from raven_exporter.models.messages import MESSAGE_TYPES, RavenMessage

# The device writes a sequence of sibling elements with no document root.
# Wrapping the whole stream in one synthetic element keeps expat happy.
_STREAM_ROOT = b"<raven-stream>"


# ============================================================================
# Framer (push side)
# ============================================================================

class MessageFramer:
    """
    Incremental XML framer for the RAVEn serial stream.

    Bytes can arrive in chunks of any size; a message is only produced once
    its closing tag has been seen. Elements whose tag is not registered are
    skipped, as is any text between elements.
    """

    def __init__(self, message_types: Iterable[type] = MESSAGE_TYPES):
        self._types = {cls.tag: cls for cls in message_types}
        self._parser = ET.XMLPullParser(events=("start", "end"))
        self._parser.feed(_STREAM_ROOT)
        self._flush = getattr(self._parser, "flush", None)
        self._root: Optional[ET.Element] = None
        self._depth = 0

    @property
    def pending(self) -> bool:
        """True while an element is open, i.e. a partial message is buffered."""
        return self._depth > 1

    def feed(self, data: bytes) -> list[RavenMessage]:
        try:
            self._parser.feed(data)
            # Expat 2.6+ may defer small partial feeds; a live link needs every
            # closing tag reported as soon as it arrives.
            if self._flush is not None:
                self._flush()
            events = list(self._parser.read_events())
        except ET.ParseError as exc:
            raise StreamFault(f"malformed markup on stream: {exc}") from exc

        messages: list[RavenMessage] = []
        for event, elem in events:
            if event == "start":
                self._depth += 1
                if self._root is None:
                    self._root = elem
                continue

            self._depth -= 1
            cls = self._types.get(elem.tag)
            if cls is not None:
                messages.append(self._build(cls, elem))
            if self._depth == 1 and self._root is not None:
                # Top-level element done; drop it so the tree never grows.
                self._root.clear()

        return messages

    @staticmethod
    def _build(cls: Any, elem: ET.Element) -> RavenMessage:
        values = {
            attr: elem.findtext(child, default="")
            for attr, child in cls.fields.items()
        }
        return cls(**values)


# ============================================================================
# Scanner (pull side)
# ============================================================================

class StreamScanner:
    """
    Pulls bytes from a blocking source and hands out one message at a time.

    `source` needs a `read(n) -> bytes` method; an empty read means the
    stream is closed. pyserial ports also expose `in_waiting`, which lets us
    drain everything already buffered in a single read.
    """

    def __init__(
        self,
        source: Any,
        *,
        log: Optional[logging.Logger] = None,
    ):
        self.source = source
        self.framer = MessageFramer()
        self.log = log or logging.getLogger("raven.scanner")
        self._queue: deque[RavenMessage] = deque()
        self._fault: Optional[StreamFault] = None

    # ----------------------------------------------------------------------

    def _read(self) -> bytes:
        try:
            waiting = getattr(self.source, "in_waiting", 0) or 0
            return self.source.read(max(1, waiting))
        except OSError as exc:
            raise StreamFault(f"error reading from serial port: {exc}") from exc

    # ----------------------------------------------------------------------

    def next_message(self) -> Optional[RavenMessage]:
        """
        Block until a complete message is framed and return it.

        Returns None once the source is exhausted. A StreamFault is final:
        every later call raises again.
        """
        if self._fault is not None:
            raise StreamFault(f"scanner stopped after earlier fault: {self._fault}")

        try:
            while not self._queue:
                data = self._read()
                if not data:
                    if self.framer.pending:
                        self.log.warning("Stream closed with an incomplete message buffered")
                    return None
                self.log.debug("Read %d bytes", len(data))
                self._queue.extend(self.framer.feed(data))
        except StreamFault as exc:
            self._fault = exc
            raise

        return self._queue.popleft()

    def __iter__(self) -> Iterator[RavenMessage]:
        while (message := self.next_message()) is not None:
            yield message
