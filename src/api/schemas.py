"""Pydantic request/response models for the webtool API."""

from pydantic import BaseModel, Field, StrictFloat, StrictInt

# =============================================================================
# Request Models
# =============================================================================


class ProgressUpdateRequest(BaseModel):
    """Playback progress reported by the player."""

    video_id: str = Field(alias="videoId")
    current_time: StrictInt | StrictFloat = Field(alias="currentTime")
    duration: StrictInt | StrictFloat

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"videoId": "3f2a9c0e5b7d4e1f8a6b2c9d0e1f2a3b", "currentTime": 10, "duration": 100}]},
    }


class SubmissionCreateRequest(BaseModel):
    """URL submitted by a visitor. ``url`` is checked by the service so a
    missing value gets the same answer as a malformed one."""

    url: str | None = None
    title: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"url": "https://example.com/article", "title": "Example"}]}}


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "healthy"}]}}


class SuccessResponse(BaseModel):
    """Acknowledgement for write operations without a payload."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str

    model_config = {"json_schema_extra": {"examples": [{"error": "Not Found"}]}}


class SubmissionResponse(BaseModel):
    """A stored URL submission."""

    id: str
    url: str
    title: str
    created_at: str
    ip_address: str
    user_agent: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "9b1deb4d3b7d4bad9bdd2b0d7b3dcb6d",
                    "url": "https://example.com/article",
                    "title": "example.com",
                    "created_at": "2026-02-08T12:00:00.000Z",
                    "ip_address": "203.0.113.7",
                    "user_agent": "Mozilla/5.0",
                }
            ]
        }
    }
