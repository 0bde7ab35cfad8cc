"""Tests for SubmissionLog."""

import pytest

from services.kv_store import MemoryKVStore
from services.submission_log import SubmissionLog, SubmissionValidationError


@pytest.fixture
def store():
    return MemoryKVStore()


@pytest.fixture
def log(store):
    return SubmissionLog(store, max_submissions=100)


@pytest.mark.asyncio
async def test_add_submission_defaults(log, store):
    submission = await log.add_submission("https://news.example.org/story/1")

    assert submission.title == "news.example.org"
    assert submission.ip_address == "unknown"
    assert submission.user_agent == "unknown"
    assert await store.get("submissions", "json") == [submission.to_dict()]


@pytest.mark.asyncio
async def test_add_submission_keeps_title_and_client_info(log):
    submission = await log.add_submission(
        "http://a.io", title="My link", ip_address="203.0.113.7", user_agent="Mozilla/5.0"
    )

    assert submission.title == "My link"
    assert submission.ip_address == "203.0.113.7"
    assert submission.user_agent == "Mozilla/5.0"


@pytest.mark.asyncio
async def test_empty_title_falls_back_to_host(log):
    submission = await log.add_submission("https://a.io/x", title="")
    assert submission.title == "a.io"


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, "", "not-a-url", "ftp://a.io", "https://"])
async def test_invalid_url_rejected_without_write(log, store, url):
    await log.add_submission("https://first.io")
    before = await store.get("submissions", "json")

    with pytest.raises(SubmissionValidationError, match="Invalid URL"):
        await log.add_submission(url)

    assert await store.get("submissions", "json") == before


@pytest.mark.asyncio
async def test_cap_keeps_most_recent(store):
    log = SubmissionLog(store, max_submissions=100)
    added = [await log.add_submission(f"https://site{n}.io") for n in range(105)]

    stored = await log.list_submissions()
    assert len(stored) == 100
    assert [entry["id"] for entry in stored] == [s.id for s in reversed(added[5:])]


@pytest.mark.asyncio
async def test_list_empty(log):
    assert await log.list_submissions() == []
