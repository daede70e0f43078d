"""
Whole-document JSON storage for collections and environments.

Each document kind lives in its own file under the data directory and is
always rewritten in full. There is no locking: two writers doing
read-modify-write at the same time can lose one of the updates.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Iterable

from ..exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

COLLECTIONS_DOCUMENT = "rest-client-collections"
ENVIRONMENTS_DOCUMENT = "rest-client-environments"


def new_document_id(existing: Iterable[str]) -> str:
    """
    Generate an id from the current time in milliseconds.

    The value is bumped until it is unique among ``existing``.
    """
    taken = set(existing)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def required_name(name: str, kind: str) -> str:
    """Strip a display name, rejecting one that is blank."""
    name = name.strip()
    if not name:
        raise ValidationError(f"{kind} name is required")
    return name


class DocumentStore:
    """
    Stores named JSON documents as ``<directory>/<name>.json``.

    Usage:
        documents = DocumentStore("./data")
        collections = documents.load(COLLECTIONS_DOCUMENT, [])
        documents.save(COLLECTIONS_DOCUMENT, collections)
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def load(self, name: str, default: Any) -> Any:
        """
        Read a document.

        A missing document yields ``default``. A document that is not valid
        JSON is logged and also yields ``default``.

        Raises:
            StorageError: if the file exists but cannot be read
        """
        path = self.path(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return default
        except OSError as exc:
            logger.exception("Failed to read document %s", path)
            raise StorageError(f"Failed to read {name}") from exc

        try:
            return json.loads(raw)
        except ValueError:
            logger.error("Failed to load %s: document is not valid JSON", path)
            return default

    def save(self, name: str, data: Any) -> None:
        """
        Replace a document with ``data``.

        The new content is written to a temporary file first and moved into
        place, so a reader never sees a partially written document.

        Raises:
            StorageError: if the document cannot be written
        """
        path = self.path(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(data, tmp)
                os.replace(tmp_path, path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.exception("Failed to write document %s", path)
            raise StorageError(f"Failed to write {name}") from exc
