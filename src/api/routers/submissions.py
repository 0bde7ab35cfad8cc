"""URL submission routes for the webtool API."""

import logging

from api.dependencies import get_config, get_submission_log, get_submission_request
from api.schemas import ErrorResponse, SubmissionCreateRequest, SubmissionResponse
from fastapi import APIRouter, Depends, HTTPException, Request
from services.submission_log import SubmissionLog, SubmissionValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Submissions"])


@router.get(
    "/api/submissions",
    summary="List submissions",
    description="Returns submitted URLs newest first.",
)
async def list_submissions(log: SubmissionLog = Depends(get_submission_log)) -> list[dict]:
    """List all submissions."""
    return await log.list_submissions()


@router.post(
    "/api/submissions",
    status_code=201,
    response_model=SubmissionResponse,
    summary="Submit URL",
    description="Stores a URL with the submitter's address and user agent. The title defaults to the URL host.",
    responses={400: {"model": ErrorResponse, "description": "Invalid URL"}},
)
async def add_submission(
    request: Request,
    payload: SubmissionCreateRequest = Depends(get_submission_request),
    log: SubmissionLog = Depends(get_submission_log),
    config: dict = Depends(get_config),
) -> dict:
    """Submit a new URL."""
    ip_address = request.headers.get(config["client_ip_header"]) or "unknown"
    user_agent = request.headers.get("user-agent") or "unknown"

    try:
        submission = await log.add_submission(
            payload.url,
            title=payload.title,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    except SubmissionValidationError as e:
        logger.warning(f"Rejected submission from {ip_address}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return submission.to_dict()
