# Services package

from .variable_substitution import extract_variables, substitute, substitute_draft
from .history_store import HistoryStore
from .http_executor import execute_request
from .document_store import DocumentStore, new_document_id
from .collection_store import CollectionStore
from .environment_store import EnvironmentStore
from .backup import export_data, import_data

__all__ = [
    "extract_variables",
    "substitute",
    "substitute_draft",
    "HistoryStore",
    "execute_request",
    "DocumentStore",
    "new_document_id",
    "CollectionStore",
    "EnvironmentStore",
    "export_data",
    "import_data",
]
