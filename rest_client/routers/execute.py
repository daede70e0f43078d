"""
Request execution API routes.

Provides the endpoint that sends a composed request. Every attempt, whether
it got a response or not, is recorded in history before the reply is sent.
"""

from typing import Union

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..config import Settings
from ..dependencies import (
    get_environment_store,
    get_history_store,
    get_http_client,
    get_settings,
)
from ..exceptions import ErrorResponse, ValidationError
from ..schemas.execute import ExecuteErrorResponse, ExecuteResponse
from ..schemas.request import HttpRequest, RequestDraft
from ..services.environment_store import EnvironmentStore
from ..services.history_store import HistoryStore
from ..services.http_executor import execute_request
from ..services.variable_substitution import substitute_draft


router = APIRouter(prefix="/api/request", tags=["execute"])


def result_response(result: ExecuteResponse | ExecuteErrorResponse) -> JSONResponse:
    """Send a failure as 500 and any captured response as 200."""
    status_code = (
        status.HTTP_500_INTERNAL_SERVER_ERROR
        if isinstance(result, ExecuteErrorResponse)
        else status.HTTP_200_OK
    )
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json", by_alias=True),
    )


@router.post(
    "",
    response_model=Union[ExecuteResponse, ExecuteErrorResponse],
    responses={
        200: {"model": ExecuteResponse, "description": "Response received (any HTTP status)"},
        400: {"model": ErrorResponse, "description": "URL or method missing"},
        500: {"model": ExecuteErrorResponse, "description": "Network failure"},
    }
)
async def execute_temporary_request(
    request: HttpRequest,
    substitute: bool = False,
    client: httpx.AsyncClient = Depends(get_http_client),
    store: HistoryStore = Depends(get_history_store),
    environments: EnvironmentStore = Depends(get_environment_store),
    settings: Settings = Depends(get_settings),
):
    """
    Execute a composed HTTP request.

    Args:
        request: URL, method, headers, body and optional name
        substitute: Apply the active environment's variables before sending
        client: HTTP client used for the outbound call
        store: History store receiving the entry
        environments: Source of the active environment
        settings: Application settings (request timeout)

    Returns:
        The captured response with 200, or the failure with 500

    Raises:
        ValidationError: 400 if url or method is missing
    """
    if not request.url or not request.method:
        raise ValidationError("URL and method are required")

    draft = RequestDraft(
        url=request.url,
        method=request.method,
        headers=request.headers,
        body=request.body,
        name=request.name,
    )
    if substitute:
        draft = substitute_draft(draft, environments.active_variables())

    result = await execute_request(
        draft=draft,
        client=client,
        store=store,
        timeout=settings.REQUEST_TIMEOUT,
    )
    return result_response(result)
