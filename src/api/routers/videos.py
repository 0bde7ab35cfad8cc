"""Saved video routes for the webtool API."""

from typing import Any

from api.dependencies import get_progress_update, get_video_fields, get_video_library
from api.schemas import ErrorResponse, ProgressUpdateRequest, SuccessResponse
from fastapi import APIRouter, Depends
from services.video_library import VideoLibrary

router = APIRouter(tags=["Videos"])


@router.get(
    "/api/videos",
    summary="List videos",
    description="Returns saved videos newest first, each with its playback progress when one is stored.",
)
async def list_videos(library: VideoLibrary = Depends(get_video_library)) -> list[dict]:
    """List all saved videos."""
    videos = await library.list_videos()
    return [video.to_dict() for video in videos]


@router.post(
    "/api/videos",
    status_code=201,
    summary="Add video",
    description="Stores any JSON object as a video. The server assigns id and addedAt.",
    responses={400: {"model": ErrorResponse, "description": "Body is not a JSON object"}},
)
async def add_video(
    fields: dict[str, Any] = Depends(get_video_fields),
    library: VideoLibrary = Depends(get_video_library),
) -> dict:
    """Add a video at the head of the list."""
    video = await library.add_video(fields)
    return video.to_dict()


@router.post(
    "/api/videos/progress",
    response_model=SuccessResponse,
    summary="Update playback progress",
    description="Creates or overwrites the progress record of a video. The video does not need to exist.",
    responses={400: {"model": ErrorResponse, "description": "Missing or invalid fields"}},
)
async def update_progress(
    request: ProgressUpdateRequest = Depends(get_progress_update),
    library: VideoLibrary = Depends(get_video_library),
) -> dict[str, bool]:
    """Store playback progress for a video."""
    await library.update_progress(request.video_id, request.current_time, request.duration)
    return {"success": True}


@router.post(
    "/api/videos/clear",
    response_model=SuccessResponse,
    summary="Clear videos",
    description="Removes every video together with its progress record.",
)
async def clear_videos(library: VideoLibrary = Depends(get_video_library)) -> dict[str, bool]:
    """Remove all videos."""
    await library.clear_videos()
    return {"success": True}


@router.delete(
    "/api/videos/{video_path:path}",
    response_model=SuccessResponse,
    summary="Delete video",
    description="Removes one video and its progress record. Succeeds even if the id is unknown.",
)
async def delete_video(video_path: str, library: VideoLibrary = Depends(get_video_library)) -> dict[str, bool]:
    """Delete a video by the last segment of the path."""
    video_id = video_path.split("/")[-1]
    await library.delete_video(video_id)
    return {"success": True}
