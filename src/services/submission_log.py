"""Visitor URL submissions, newest-first and capped."""

import logging
from typing import Any

from models.submission import DEFAULT_MAX_SUBMISSIONS, SUBMISSIONS_KEY, Submission, default_title, is_valid_url
from services.kv_store import KVStore
from utils.records import new_record_id, prepend_capped, utc_timestamp

logger = logging.getLogger(__name__)


class SubmissionValidationError(Exception):
    """Submitted data was rejected before anything was stored."""

    pass


class SubmissionLog:
    """Read-modify-write operations over the stored submission list."""

    def __init__(self, store: KVStore, max_submissions: int = DEFAULT_MAX_SUBMISSIONS):
        self.store = store
        self.max_submissions = max_submissions

    async def list_submissions(self) -> list[dict[str, Any]]:
        """Return all stored submissions, newest first."""
        return await self.store.get(SUBMISSIONS_KEY, "json") or []

    async def add_submission(
        self,
        url: str | None,
        title: str | None = None,
        ip_address: str = "unknown",
        user_agent: str = "unknown",
    ) -> Submission:
        """Validate and store a new submission at the head of the list.

        Args:
            url: Submitted URL, must start with http:// or https://
            title: Optional title, defaults to the URL's host
            ip_address: Client address as reported by the proxy
            user_agent: Client User-Agent header

        Returns:
            The created submission

        Raises:
            SubmissionValidationError: If the URL is missing or malformed.
                Nothing is written in that case.
        """
        if not is_valid_url(url):
            logger.info(f"Rejected submission with invalid URL: {url!r}")
            raise SubmissionValidationError("Invalid URL")

        submission = Submission(
            id=new_record_id(),
            url=url,
            title=title or default_title(url),
            created_at=utc_timestamp(),
            ip_address=ip_address,
            user_agent=user_agent,
        )

        submissions = await self.list_submissions()
        await self.store.put(
            SUBMISSIONS_KEY,
            prepend_capped(submissions, submission.to_dict(), self.max_submissions),
        )

        logger.info(f"Stored submission {submission.id} for {url}")
        return submission
