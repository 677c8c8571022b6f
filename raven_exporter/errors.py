# raven_exporter/errors.py


class RavenError(Exception):
    """Base for every fault that stops the exporter."""


class StreamFault(RavenError):
    """The serial stream failed or carried markup that cannot be framed."""


class ParseError(RavenError, ValueError):
    """A message field is not a valid unsigned 32-bit integer."""

    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"{field}: cannot parse {value!r} ({reason})")


class DivisionError(RavenError, ZeroDivisionError):
    """A reading arrived with a zero divisor."""
