"""
Export/import API routes.

Export downloads collections and environments as one JSON bundle; import
takes the same bundle and overwrites the local documents.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..dependencies import get_collection_store, get_environment_store
from ..exceptions import ErrorResponse
from ..schemas.backup import ExportDocument, ImportResult
from ..services.backup import export_data, export_filename, import_data
from ..services.collection_store import CollectionStore
from ..services.environment_store import EnvironmentStore


router = APIRouter(prefix="/api", tags=["backup"])


@router.get("/export", response_model=ExportDocument)
def export_bundle(
    collections: CollectionStore = Depends(get_collection_store),
    environments: EnvironmentStore = Depends(get_environment_store),
):
    """Download all collections and environments as a JSON attachment."""
    document = export_data(collections, environments)
    return JSONResponse(
        content=document.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post(
    "/import",
    response_model=ImportResult,
    responses={400: {"model": ErrorResponse, "description": "Malformed import data"}},
)
async def import_bundle(
    request: Request,
    collections: CollectionStore = Depends(get_collection_store),
    environments: EnvironmentStore = Depends(get_environment_store),
):
    """
    Import a previously exported bundle.

    The raw body is parsed here rather than by FastAPI so that invalid JSON
    is reported as a malformed import. Nothing is written unless the whole
    bundle is valid.
    """
    raw = await request.body()
    return import_data(raw, collections, environments)
