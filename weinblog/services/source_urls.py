"""Association between catalog wines and the product URL they were found by."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class SourceUrlStore:
    """JSON file mapping wine ids to the last URL that resolved to them.

    A missing, unreadable or corrupt file reads as an empty mapping. Saves
    replace the file atomically, so readers never see a partial write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def all(self) -> dict[str, str]:
        """Get every stored wine id -> URL pair."""
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read source URLs from {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed source URL file: {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, wine_id: str) -> str | None:
        """Get the source URL saved for a wine."""
        return self.all().get(wine_id)

    def save(self, wine_id: str, url: str) -> None:
        """Save ``url`` as the source of ``wine_id``, replacing any previous one."""
        with self._lock:
            urls = self.all()
            urls[wine_id] = url
            self._write(urls)
        logger.debug(f"Saved source URL for wine {wine_id}: {url}")

    def _write(self, urls: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(urls, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
