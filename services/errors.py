"""Error taxonomy for fetching, extracting and writing temperature series."""

from __future__ import annotations

from typing import Optional


class TemperatureImportError(RuntimeError):
    """Base class for every failure surfaced by the importer."""


class FetchError(TemperatureImportError):
    """The WFS request did not yield a usable response body."""


class TransportError(FetchError):
    """The request could not be sent or the connection failed."""


class ServiceStatusError(FetchError):
    """The WFS answered with a non-success HTTP status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        message = f"FMI WFS returned HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code


class ServiceExceptionError(FetchError):
    """The WFS embedded an ExceptionReport in its response body."""

    def __init__(self, preview: str) -> None:
        super().__init__(f"FMI WFS exception response:\n{preview}")
        self.preview = preview


class ExtractionError(TemperatureImportError):
    """The response document could not be turned into datapoints."""


class XmlSyntaxError(ExtractionError):
    """The response is not well-formed XML."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"error while parsing FMI WFS XML{location}: {message}")
        self.line = line


class InvalidTimestampError(ExtractionError):
    def __init__(self, text: str) -> None:
        super().__init__(f"invalid timestamp in FMI WFS response: {text!r}")
        self.text = text


class InvalidValueError(ExtractionError):
    def __init__(self, text: str) -> None:
        super().__init__(f"invalid temperature value in FMI WFS response: {text!r}")
        self.text = text


class WriteError(TemperatureImportError):
    """Persisting datapoints to the time-series store failed."""
