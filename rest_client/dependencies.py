"""
FastAPI dependencies shared by the routers.

Everything here reads the resources the application lifespan placed on
``app.state``, so tests can swap any of them with ``dependency_overrides``.
"""

import httpx
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .config import Settings
from .database import get_db
from .services.collection_store import CollectionStore
from .services.document_store import DocumentStore
from .services.environment_store import EnvironmentStore
from .services.history_store import HistoryStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_history_store(db: Session = Depends(get_db)) -> HistoryStore:
    return HistoryStore(db)


def get_collection_store(documents: DocumentStore = Depends(get_document_store)) -> CollectionStore:
    return CollectionStore(documents)


def get_environment_store(documents: DocumentStore = Depends(get_document_store)) -> EnvironmentStore:
    return EnvironmentStore(documents)
