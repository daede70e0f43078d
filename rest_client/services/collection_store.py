"""
Collection store: named, ordered groups of saved request drafts.

All collections are kept in a single JSON document; every change reads the
whole document, modifies it and writes it back.
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ..exceptions import ResourceNotFoundError
from ..schemas.collection import Collection
from ..schemas.request import RequestDraft
from .document_store import (
    COLLECTIONS_DOCUMENT,
    DocumentStore,
    new_document_id,
    required_name,
)

logger = logging.getLogger(__name__)

_collections_adapter = TypeAdapter(list[Collection])


def default_request_name(draft: RequestDraft) -> str:
    return f"{draft.method} {draft.url}"


class CollectionStore:
    def __init__(self, documents: DocumentStore):
        self.documents = documents

    def list(self) -> list[Collection]:
        raw = self.documents.load(COLLECTIONS_DOCUMENT, [])
        try:
            return _collections_adapter.validate_python(raw)
        except PydanticValidationError:
            logger.error("Failed to load collections: stored document has an invalid shape")
            return []

    def _save(self, collections: list[Collection]) -> None:
        self.documents.save(
            COLLECTIONS_DOCUMENT,
            _collections_adapter.dump_python(collections, mode="json"),
        )

    @staticmethod
    def _index_of(collections: list[Collection], collection_id: str) -> int:
        for index, collection in enumerate(collections):
            if collection.id == collection_id:
                return index
        raise ResourceNotFoundError("Collection", collection_id)

    def get(self, collection_id: str) -> Collection:
        collections = self.list()
        return collections[self._index_of(collections, collection_id)]

    def create(self, name: str) -> Collection:
        collections = self.list()
        collection = Collection(
            id=new_document_id(c.id for c in collections),
            name=required_name(name, "Collection"),
            requests=[],
        )
        collections.append(collection)
        self._save(collections)
        logger.info("Created collection %s (%s)", collection.id, collection.name)
        return collection

    def update(self, collection_id: str, name: str) -> Collection:
        collections = self.list()
        index = self._index_of(collections, collection_id)
        name = required_name(name, "Collection")
        collections[index] = collections[index].model_copy(update={"name": name})
        self._save(collections)
        return collections[index]

    def delete(self, collection_id: str) -> None:
        collections = self.list()
        del collections[self._index_of(collections, collection_id)]
        self._save(collections)
        logger.info("Deleted collection %s", collection_id)

    def add_request(self, collection_id: str, draft: RequestDraft) -> Collection:
        """
        Append a draft to a collection.

        A draft without a name is saved as ``"METHOD URL"``.
        """
        collections = self.list()
        index = self._index_of(collections, collection_id)
        if not draft.name:
            draft = draft.model_copy(update={"name": default_request_name(draft)})
        collection = collections[index]
        collections[index] = collection.model_copy(
            update={"requests": [*collection.requests, draft]}
        )
        self._save(collections)
        return collections[index]

    def remove_request(self, collection_id: str, request_index: int) -> Collection:
        """
        Remove the draft at ``request_index`` from a collection.

        Raises:
            ResourceNotFoundError: if the collection or the index does not exist
        """
        collections = self.list()
        index = self._index_of(collections, collection_id)
        collection = collections[index]
        if not 0 <= request_index < len(collection.requests):
            raise ResourceNotFoundError("Request", f"{request_index} in collection {collection_id}")
        requests = [r for i, r in enumerate(collection.requests) if i != request_index]
        collections[index] = collection.model_copy(update={"requests": requests})
        self._save(collections)
        return collections[index]

    def get_request(self, collection_id: str, request_index: int) -> RequestDraft:
        collection = self.get(collection_id)
        if not 0 <= request_index < len(collection.requests):
            raise ResourceNotFoundError("Request", f"{request_index} in collection {collection_id}")
        return collection.requests[request_index]

    def replace_all(self, collections: list[Collection]) -> None:
        self._save(collections)
