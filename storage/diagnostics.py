from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ResponseDump:
    """Keeps the last raw WFS response on disk for offline inspection."""

    def __init__(self, path: Optional[Path]) -> None:
        self.path = path

    def write(self, body: str) -> bool:
        if self.path is None:
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(body, encoding="utf-8")
        except OSError as exc:
            logger.warning(
                "Failed to dump initial FMI response",
                extra={"dump_path": str(self.path), "reason": exc},
            )
            return False
        logger.debug("Dumped FMI response", extra={"dump_path": str(self.path)})
        return True
