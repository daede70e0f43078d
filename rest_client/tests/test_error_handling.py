"""
Tests for global error handling and response format consistency.

Every failure the API reports has the shape
``{"error": <message>, "error_code": <code>}``.
"""

import shutil
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, strategies as st, settings
from fastapi.testclient import TestClient

from rest_client.config import Settings
from rest_client.database import Database
from rest_client.dependencies import get_document_store, get_history_store
from rest_client.exceptions import (
    MalformedImportError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
)
from rest_client.main import create_app
from rest_client.services.document_store import DocumentStore
from rest_client.services.history_store import HistoryStore


@pytest.fixture(scope="module")
def workdir():
    path = tempfile.mkdtemp()
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture(scope="module")
def app(workdir):
    return create_app(Settings(DATABASE_URL=f"sqlite:///{workdir}/test.db", DATA_DIR=workdir))


@pytest.fixture(scope="module")
def client(app):
    """Create test client with test storage."""
    with TestClient(app) as c:
        yield c


def assert_error_format(response, status_code: int, error_code: str) -> dict:
    assert response.status_code == status_code
    data = response.json()
    assert set(data) == {"error", "error_code"}
    assert isinstance(data["error"], str) and data["error"]
    assert data["error_code"] == error_code
    return data


# Strategies for generating test data
resource_id_strategy = st.integers(min_value=90000, max_value=99999)

resource_path_strategy = st.sampled_from(["collections", "environments"])

invalid_http_method_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
    min_size=1,
    max_size=10
).filter(lambda m: m not in ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"])


class TestErrorResponseFormat:
    """Tests for consistent error response format."""

    def test_404_error_format_history_not_found(self, client):
        data = assert_error_format(client.get("/api/history/99999"), 404, "RESOURCE_NOT_FOUND")
        assert data["error"] == "History item with id 99999 not found"

    def test_404_error_format_collection_not_found(self, client):
        data = assert_error_format(client.get("/api/collections/99999"), 404, "RESOURCE_NOT_FOUND")
        assert "99999" in data["error"]

    def test_404_error_format_environment_not_found(self, client):
        data = assert_error_format(client.get("/api/environments/99999"), 404, "RESOURCE_NOT_FOUND")
        assert "99999" in data["error"]

    @given(resource_id=resource_id_strategy, resource=resource_path_strategy)
    @settings(max_examples=20, deadline=None)
    def test_404_for_any_unknown_id(self, client, resource_id: int, resource: str):
        """
        Property: Any unknown document id yields a 404 that names the id.
        """
        data = assert_error_format(
            client.get(f"/api/{resource}/{resource_id}"), 404, "RESOURCE_NOT_FOUND"
        )
        assert str(resource_id) in data["error"]

    @given(method=invalid_http_method_strategy)
    @settings(max_examples=20, deadline=None)
    def test_invalid_method_is_400(self, client, method: str):
        """
        Property: A method outside the supported set is rejected with 400.
        """
        response = client.post("/api/request", json={"url": "https://example.com", "method": method})

        data = assert_error_format(response, 400, "VALIDATION_ERROR")
        assert "method" in data["error"]

    def test_missing_body_field_is_400(self, client):
        assert_error_format(client.post("/api/collections", json={}), 400, "VALIDATION_ERROR")

    def test_non_integer_path_parameter_is_400(self, client):
        assert_error_format(client.get("/api/history/abc"), 400, "VALIDATION_ERROR")

    def test_missing_id_on_history_delete_is_400(self, client):
        data = assert_error_format(client.delete("/api/history"), 400, "VALIDATION_ERROR")
        assert data["error"] == "ID is required"

    def test_malformed_import_is_400(self, client):
        assert_error_format(client.post("/api/import", content=b"{"), 400, "MALFORMED_IMPORT")


class TestStorageErrors:
    """Storage failures are reported as 500 with a generic message."""

    def test_unwritable_document_directory(self, app, client, workdir):
        blocker = Path(workdir) / "not-a-directory"
        blocker.write_text("", encoding="utf-8")
        app.dependency_overrides[get_document_store] = lambda: DocumentStore(blocker)
        try:
            read = client.get("/api/collections")
            write = client.post("/api/collections", json={"name": "x"})
        finally:
            app.dependency_overrides.pop(get_document_store, None)

        for response in (read, write):
            data = assert_error_format(response, 500, "STORAGE_ERROR")
            assert data["error"] == "Storage error occurred"

    def test_history_database_failure(self, app, client, workdir):
        # Never initialized, so the history table does not exist
        database = Database(f"sqlite:///{workdir}/uninitialized.db")
        db = database.session()
        app.dependency_overrides[get_history_store] = lambda: HistoryStore(db)
        try:
            response = client.get("/api/history")
        finally:
            app.dependency_overrides.pop(get_history_store, None)
            db.close()
            database.dispose()

        data = assert_error_format(response, 500, "STORAGE_ERROR")
        assert data["error"] == "Storage error occurred"
        assert "request_history" not in data["error"]


class TestExceptionClasses:

    def test_resource_not_found(self):
        exc = ResourceNotFoundError("Collection", "42")

        assert exc.status_code == 404
        assert exc.error_code == "RESOURCE_NOT_FOUND"
        assert exc.detail == "Collection with id 42 not found"
        assert exc.resource_type == "Collection"
        assert exc.resource_id == "42"

    @pytest.mark.parametrize("exc,status_code,error_code", [
        (ValidationError("bad"), 400, "VALIDATION_ERROR"),
        (StorageError(), 500, "STORAGE_ERROR"),
        (MalformedImportError(), 400, "MALFORMED_IMPORT"),
    ])
    def test_status_and_code(self, exc, status_code, error_code):
        assert exc.status_code == status_code
        assert exc.error_code == error_code
        assert str(exc) == exc.detail


class TestUnhandledErrors:

    def test_unexpected_exception_is_500(self, workdir):
        app = create_app(Settings(DATABASE_URL=f"sqlite:///{workdir}/unhandled.db", DATA_DIR=workdir))

        @app.get("/boom")
        def boom():
            raise RuntimeError("secret internals")

        with TestClient(app, raise_server_exceptions=False) as c:
            response = c.get("/boom")

        data = assert_error_format(response, 500, "INTERNAL_ERROR")
        assert data["error"] == "Internal server error"
