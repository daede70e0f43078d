"""
Pydantic schemas for exporting and importing local documents.
"""

from .base import CamelModel
from .collection import Collection
from .environment import EnvironmentsDocument

EXPORT_VERSION = "1.0.0"


class ExportDocument(CamelModel):
    """Downloadable bundle of all collections and environments."""
    collections: list[Collection]
    environments: EnvironmentsDocument
    export_date: str
    version: str = EXPORT_VERSION


class ImportDocument(CamelModel):
    """
    Accepted import bundle.

    Missing sections leave the corresponding local document untouched.
    """
    collections: list[Collection] | None = None
    environments: EnvironmentsDocument | None = None
    export_date: str | None = None
    version: str | None = None


class ImportResult(CamelModel):
    success: bool = True
    collections_imported: int
    environments_imported: int
