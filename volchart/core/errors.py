from __future__ import annotations


class VolchartError(Exception):
    """Base class for every failure surfaced to the console."""


class ConnectorInitError(VolchartError):
    pass


class FetchError(VolchartError):
    pass


class RenderError(VolchartError):
    pass


class DateConversionError(RenderError):
    def __init__(self, timestamp: object):
        super().__init__(f"Invalid timestamp: {timestamp!r}")
        self.timestamp = timestamp


def one_line_error(text: str) -> str:
    compact = " ".join(str(text).split())
    return compact[:180]
