"""Dependency injection for the webtool API.

The store is created (or injected) once per application and kept on
``app.state``; services are cheap wrappers built per request.
"""

import json
from typing import Any

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.schemas import ProgressUpdateRequest, SubmissionCreateRequest
from services.kv_store import KVStore
from services.submission_log import SubmissionLog
from services.video_library import VideoLibrary


def get_config(request: Request) -> dict:
    """Configuration the application was created with."""
    return request.app.state.config


def get_store(request: Request) -> KVStore:
    """Key-value store bound to the application."""
    store = request.app.state.store
    if store is None:
        raise RuntimeError("KV store is not initialized")
    return store


def get_video_library(store: KVStore = Depends(get_store), config: dict = Depends(get_config)) -> VideoLibrary:
    return VideoLibrary(store, max_videos=config["max_videos"])


def get_submission_log(store: KVStore = Depends(get_store), config: dict = Depends(get_config)) -> SubmissionLog:
    return SubmissionLog(store, max_submissions=config["max_submissions"])


# =============================================================================
# Request bodies
# =============================================================================


async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON whatever its Content-Type.

    Browsers posting ``JSON.stringify(...)`` without a header send
    ``text/plain``. An empty or malformed body raises
    ``json.JSONDecodeError``, which the server turns into a 500.
    """
    return json.loads(await request.body())


def _body_validation_error(exc: ValidationError) -> RequestValidationError:
    return RequestValidationError(
        [{**err, "loc": ("body", *err["loc"])} for err in exc.errors(include_url=False)]
    )


async def get_video_fields(body: Any = Depends(read_json_body)) -> dict[str, Any]:
    """Video body: any JSON object."""
    if not isinstance(body, dict):
        raise RequestValidationError(
            [{"type": "dict_type", "loc": ("body",), "msg": "Input should be a valid dictionary", "input": body}]
        )
    return body


async def get_progress_update(body: Any = Depends(read_json_body)) -> ProgressUpdateRequest:
    try:
        return ProgressUpdateRequest.model_validate(body)
    except ValidationError as e:
        raise _body_validation_error(e) from e


async def get_submission_request(body: Any = Depends(read_json_body)) -> SubmissionCreateRequest:
    try:
        return SubmissionCreateRequest.model_validate(body)
    except ValidationError as e:
        raise _body_validation_error(e) from e
