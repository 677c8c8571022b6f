# tests/fake_serial.py

from collections import deque


class FakeSerialPort:
    """
    Stand-in for a pyserial port.

    Hands out the given chunks one read() at a time, ignoring the requested
    size, then returns b"" (closed). An Exception instance in the chunk list
    is raised when reached.
    """

    def __init__(self, chunks):
        self.chunks = deque(chunks)
        self.reads = 0
        self.closed = False

    def read(self, size=1):
        self.reads += 1
        if not self.chunks:
            return b""
        chunk = self.chunks.popleft()
        if isinstance(chunk, Exception):
            raise chunk
        return chunk

    def close(self):
        self.closed = True


def demand_xml(device="D1", meter="M1", demand="0x0A", multiplier="0x01", divisor="0x01") -> bytes:
    return (
        "<InstantaneousDemand>\n"
        f"  <DeviceMacId>{device}</DeviceMacId>\n"
        f"  <MeterMacId>{meter}</MeterMacId>\n"
        "  <TimeStamp>0x1c531d6b</TimeStamp>\n"
        f"  <Demand>{demand}</Demand>\n"
        f"  <Multiplier>{multiplier}</Multiplier>\n"
        f"  <Divisor>{divisor}</Divisor>\n"
        "  <DigitsRight>0x03</DigitsRight>\n"
        "  <DigitsLeft>0x0f</DigitsLeft>\n"
        "  <SuppressLeadingZero>Y</SuppressLeadingZero>\n"
        "</InstantaneousDemand>\n"
    ).encode()


def summation_xml(device="D1", meter="M1", summation="0x2A", multiplier="0x01", divisor="0x03e8") -> bytes:
    return (
        "<CurrentSummationDelivered>\n"
        f"  <DeviceMacId>{device}</DeviceMacId>\n"
        f"  <MeterMacId>{meter}</MeterMacId>\n"
        "  <TimeStamp>0x1c531d6b</TimeStamp>\n"
        f"  <SummationDelivered>{summation}</SummationDelivered>\n"
        "  <SummationReceived>0x00000000</SummationReceived>\n"
        f"  <Multiplier>{multiplier}</Multiplier>\n"
        f"  <Divisor>{divisor}</Divisor>\n"
        "</CurrentSummationDelivered>\n"
    ).encode()


def connection_status_xml() -> bytes:
    return (
        "<ConnectionStatus>\n"
        "  <DeviceMacId>D1</DeviceMacId>\n"
        "  <Status>Connected</Status>\n"
        "  <Channel>20</Channel>\n"
        "  <LinkStrength>0x64</LinkStrength>\n"
        "</ConnectionStatus>\n"
    ).encode()


def split_bytes(data: bytes, size: int) -> list[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]
