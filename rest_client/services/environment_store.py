"""
Environment store: named variable sets and the active selection.

Environments and ``activeEnvId`` share one JSON document, rewritten in
full on every change.
"""

import logging

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ResourceNotFoundError
from ..schemas.environment import Environment, EnvironmentsDocument
from .document_store import (
    ENVIRONMENTS_DOCUMENT,
    DocumentStore,
    new_document_id,
    required_name,
)

logger = logging.getLogger(__name__)


class EnvironmentStore:
    def __init__(self, documents: DocumentStore):
        self.documents = documents

    def load(self) -> EnvironmentsDocument:
        raw = self.documents.load(ENVIRONMENTS_DOCUMENT, None)
        if raw is None:
            return EnvironmentsDocument()
        try:
            return EnvironmentsDocument.model_validate(raw)
        except PydanticValidationError:
            logger.error("Failed to load environments: stored document has an invalid shape")
            return EnvironmentsDocument()

    def replace(self, document: EnvironmentsDocument) -> None:
        self.documents.save(
            ENVIRONMENTS_DOCUMENT,
            document.model_dump(mode="json", by_alias=True),
        )

    def list(self) -> list[Environment]:
        return self.load().environments

    @staticmethod
    def _index_of(document: EnvironmentsDocument, environment_id: str) -> int:
        for index, environment in enumerate(document.environments):
            if environment.id == environment_id:
                return index
        raise ResourceNotFoundError("Environment", environment_id)

    def get(self, environment_id: str) -> Environment:
        document = self.load()
        return document.environments[self._index_of(document, environment_id)]

    def create(self, name: str, variables: dict[str, str] | None = None) -> Environment:
        document = self.load()
        environment = Environment(
            id=new_document_id(env.id for env in document.environments),
            name=required_name(name, "Environment"),
            variables=dict(variables or {}),
        )
        document.environments.append(environment)
        self.replace(document)
        logger.info("Created environment %s (%s)", environment.id, environment.name)
        return environment

    def update(self, environment_id: str, name: str) -> Environment:
        document = self.load()
        index = self._index_of(document, environment_id)
        document.environments[index] = document.environments[index].model_copy(
            update={"name": required_name(name, "Environment")}
        )
        self.replace(document)
        return document.environments[index]

    def set_variables(self, environment_id: str, variables: dict[str, str]) -> Environment:
        """Replace an environment's variables wholesale."""
        document = self.load()
        index = self._index_of(document, environment_id)
        document.environments[index] = document.environments[index].model_copy(
            update={"variables": dict(variables)}
        )
        self.replace(document)
        return document.environments[index]

    def delete(self, environment_id: str) -> None:
        """Delete an environment, clearing the active selection if it pointed here."""
        document = self.load()
        del document.environments[self._index_of(document, environment_id)]
        if document.active_env_id == environment_id:
            document.active_env_id = None
        self.replace(document)
        logger.info("Deleted environment %s", environment_id)

    def set_active(self, environment_id: str | None) -> EnvironmentsDocument:
        """
        Select the active environment, or clear the selection with ``None``.

        Raises:
            ResourceNotFoundError: if ``environment_id`` names no environment
        """
        document = self.load()
        if environment_id is not None:
            self._index_of(document, environment_id)
        document.active_env_id = environment_id
        self.replace(document)
        return document

    def active_environment(self) -> Environment | None:
        """
        The active environment, or ``None``.

        A selection that references a deleted environment resolves to ``None``.
        """
        document = self.load()
        if document.active_env_id is None:
            return None
        for environment in document.environments:
            if environment.id == document.active_env_id:
                return environment
        logger.debug("Active environment %s no longer exists", document.active_env_id)
        return None

    def active_variables(self) -> dict[str, str]:
        environment = self.active_environment()
        return dict(environment.variables) if environment else {}
