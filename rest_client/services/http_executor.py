"""
HTTP execution service for sending HTTP requests.

This service performs the outbound call with httpx, captures the response
whatever its status code, normalizes network failures into an error result
and records every attempt in the history store before returning.
"""

import json
import logging
import time
from typing import Any

import httpx

from ..schemas.execute import ExecuteErrorResponse, ExecuteResponse
from ..schemas.history import HistoryEntryCreate
from ..schemas.request import RequestDraft
from .history_store import HistoryStore

logger = logging.getLogger(__name__)

# Default timeout in seconds
DEFAULT_TIMEOUT = 30.0

NETWORK_ERROR_STATUS_TEXT = "Network Error"


def parse_response_data(response: httpx.Response) -> Any:
    """
    Decode a response body for display.

    The body is returned as parsed JSON when it parses, whatever the
    Content-Type says, and as text otherwise.

    Args:
        response: The received response

    Returns:
        Parsed JSON value, or the body text (empty string for no body)
    """
    body = response.text
    if not body:
        return body

    try:
        return json.loads(body)
    except ValueError:
        return body


def _failure_message(exc: Exception, timeout: float) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return f"Request timed out after {timeout:g} seconds"
    return str(exc) or type(exc).__name__


async def execute_request(
    draft: RequestDraft,
    client: httpx.AsyncClient,
    store: HistoryStore,
    timeout: float = DEFAULT_TIMEOUT
) -> ExecuteResponse | ExecuteErrorResponse:
    """
    Execute an HTTP request, record it in history and return the outcome.

    Any HTTP status code counts as a completed call. Only failures to get
    a response at all (DNS, refused connection, timeout, TLS, invalid URL,
    headers that cannot be encoded) produce an ``ExecuteErrorResponse``.
    Exactly one history entry is written per call, after the network call
    and before returning.

    Args:
        draft: The request to send, with variables already substituted
        client: HTTP client used for the call
        store: History store receiving the entry
        timeout: Request timeout in seconds

    Returns:
        ExecuteResponse on any HTTP response, ExecuteErrorResponse otherwise

    Raises:
        StorageError: if the history entry cannot be written
    """
    headers = dict(draft.headers)
    result: ExecuteResponse | ExecuteErrorResponse

    start_time = time.perf_counter()
    try:
        # Header values that are not ASCII fail while the request is built
        request = client.build_request(
            method=draft.method,
            url=draft.url,
            headers=headers,
            content=draft.body,
            timeout=timeout,
        )
        response = await client.send(request)
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        response_time = int((time.perf_counter() - start_time) * 1000)
        message = _failure_message(exc, timeout)
        logger.warning("%s %s failed after %d ms: %s", draft.method, draft.url, response_time, message)

        result = ExecuteErrorResponse(
            error=message,
            status=0,
            status_text=NETWORK_ERROR_STATUS_TEXT,
            headers={},
            data=None,
            response_time=response_time,
        )
        stored_response: dict[str, Any] = {"error": message}
    else:
        response_time = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "%s %s -> %d in %d ms", draft.method, draft.url, response.status_code, response_time
        )

        result = ExecuteResponse(
            status=response.status_code,
            status_text=response.reason_phrase or "",
            headers=dict(response.headers),
            data=parse_response_data(response),
            response_time=response_time,
        )
        stored_response = {
            "status": result.status,
            "statusText": result.status_text,
            "headers": result.headers,
            "data": result.data,
        }

    history_id = store.append(HistoryEntryCreate(
        url=draft.url,
        method=draft.method,
        headers=headers,
        body=draft.body,
        response=stored_response,
        status_code=result.status,
        response_time=response_time,
        name=draft.name,
    ))
    logger.debug("Recorded history entry %d", history_id)

    return result
