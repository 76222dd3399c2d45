"""Single-document JSON content store.

The whole site lives in one JSON file. Reads degrade to an empty document when
the file is missing or unreadable; updates load the full document, replace one
slice, and write everything back (temp file + rename). There is no locking:
concurrent writers race and the last write wins.
"""

import copy
import json
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

from cms.core.exceptions import ContentStoreError

logger = logging.getLogger(__name__)

# Slices every document carries after a write. No ``typography`` slice means
# the default stylesheet applies.
DOCUMENT_SLICES: dict[str, Any] = {
    "logo": {},
    "colors": {},
    "menus": [],
    "settings": {},
    "pages": [],
}


def empty_document() -> dict[str, Any]:
    return copy.deepcopy(DOCUMENT_SLICES)


class ContentStore:
    """Read/replace slices of the site document at ``path``."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        """Return the whole document, or an empty one if missing/corrupt."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning("Content store %s does not exist, using empty document", self.path)
            return empty_document()
        except (OSError, ValueError) as exc:
            logger.warning("Content store %s is unreadable (%s), using empty document", self.path, exc)
            return empty_document()
        if not isinstance(data, dict):
            logger.warning("Content store %s is not a JSON object, using empty document", self.path)
            return empty_document()
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Return one slice, falling back to ``default`` when absent or null."""
        value = self.load().get(key)
        if value is None:
            return copy.deepcopy(default)
        return value

    def _load_for_update(self) -> dict[str, Any]:
        if not self.path.exists():
            return empty_document()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ContentStoreError(f"Failed to read content store: {exc}") from exc
        if not isinstance(data, dict):
            raise ContentStoreError("Content store is not a JSON object")
        return data

    def write(self, document: dict[str, Any]) -> None:
        """Persist the whole document atomically."""
        payload = json.dumps(document, indent=2, ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise ContentStoreError(f"Failed to write content store: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise ContentStoreError(f"Failed to write content store: {exc}") from exc

    def update(self, mutate: Callable[[dict[str, Any]], None]) -> dict[str, Any]:
        """Read-modify-write: ``mutate`` edits the document in place."""
        document = self._load_for_update()
        for key, default in DOCUMENT_SLICES.items():
            if document.get(key) is None:
                document[key] = copy.deepcopy(default)
        mutate(document)
        self.write(document)
        return document

    def replace(self, key: str, value: Any) -> dict[str, Any]:
        """Replace one slice, leaving every sibling slice untouched."""

        def _set(document: dict[str, Any]) -> None:
            document[key] = value

        logger.info("Replacing content slice %r", key)
        return self.update(_set)

    def delete(self, key: str) -> dict[str, Any]:
        """Remove one slice entirely."""

        def _drop(document: dict[str, Any]) -> None:
            document.pop(key, None)

        logger.info("Removing content slice %r", key)
        return self.update(_drop)
