"""
Export and import of collections and environments.

An import is parsed and validated in full before anything is written, so a
malformed bundle leaves the local documents as they were.
"""

import json
import logging
from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import MalformedImportError
from ..schemas.backup import EXPORT_VERSION, ExportDocument, ImportDocument, ImportResult
from .collection_store import CollectionStore
from .environment_store import EnvironmentStore

logger = logging.getLogger(__name__)


def export_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"rest-client-backup-{now.date().isoformat()}.json"


def export_data(collections: CollectionStore, environments: EnvironmentStore) -> ExportDocument:
    """Bundle both documents with the export timestamp and format version."""
    return ExportDocument(
        collections=collections.list(),
        environments=environments.load(),
        export_date=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=EXPORT_VERSION,
    )


def parse_import(raw: str | bytes) -> ImportDocument:
    """
    Parse and validate an import bundle.

    Raises:
        MalformedImportError: if ``raw`` is not JSON or not a valid bundle
    """
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise MalformedImportError() from exc

    if not isinstance(data, dict):
        raise MalformedImportError("Import data must be a JSON object.")

    try:
        return ImportDocument.model_validate(data)
    except PydanticValidationError as exc:
        raise MalformedImportError(
            f"Import data has an invalid shape: {exc.error_count()} error(s)"
        ) from exc


def import_data(
    raw: str | bytes,
    collections: CollectionStore,
    environments: EnvironmentStore,
) -> ImportResult:
    """
    Overwrite local documents with the sections present in ``raw``.

    Args:
        raw: JSON text of an exported bundle
        collections: Collection store to overwrite
        environments: Environment store to overwrite

    Returns:
        Counts of what was imported
    """
    document = parse_import(raw)

    if document.collections is not None:
        collections.replace_all(document.collections)
    if document.environments is not None:
        environments.replace(document.environments)

    result = ImportResult(
        collections_imported=len(document.collections or []),
        environments_imported=len(document.environments.environments) if document.environments else 0,
    )
    logger.info(
        "Imported %d collection(s) and %d environment(s)",
        result.collections_imported, result.environments_imported
    )
    return result
