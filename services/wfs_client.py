from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import httpx

from services.errors import ServiceExceptionError, ServiceStatusError, TransportError

logger = logging.getLogger(__name__)

EXCEPTION_MARKER = "ExceptionReport"
PREVIEW_LINES = 10


def _preview(body: str, lines: int = PREVIEW_LINES) -> str:
    return "\n".join(body.splitlines()[:lines])


class WfsClient:
    """Minimal GetFeature client for an OGC WFS 2.0.0 endpoint."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "WfsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_feature(
        self,
        stored_query_id: str,
        parameters: Sequence[Tuple[str, str]],
    ) -> str:
        query = [
            ("service", "WFS"),
            ("version", "2.0.0"),
            ("request", "GetFeature"),
            ("storedquery_id", stored_query_id),
        ]
        query.extend(parameters)

        try:
            response = self._client.get(self.base_url, params=query, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error(
                "FMI WFS returned an error status",
                extra={"stored_query": stored_query_id, "status_code": status_code},
            )
            raise ServiceStatusError(status_code, _preview(exc.response.text, 3)) from exc
        except httpx.TransportError as exc:
            logger.error(
                "Failed to call FMI WFS GetFeature",
                extra={"stored_query": stored_query_id, "reason": exc.__class__.__name__},
            )
            raise TransportError(f"failed to call FMI WFS GetFeature: {exc}") from exc

        body = response.text
        if EXCEPTION_MARKER in body:
            logger.error(
                "FMI WFS answered with an exception report",
                extra={"stored_query": stored_query_id, "status_code": response.status_code},
            )
            raise ServiceExceptionError(_preview(body))

        return body
