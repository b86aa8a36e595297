from datetime import datetime, timedelta, timezone

import pytest

from meeting_notes.errors import StorageError
from meeting_notes.summaries import get_summary, log_email
from tests.utils import (
    email_logs,
    get_test_client,
    save_summary,
    temp_test_dir,
    test_app,
)

# in here for ruff
test_app
temp_test_dir


@pytest.mark.asyncio
async def test_create_and_get_summary(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.post(
            "/api/summaries",
            json={
                "title": "Standup",
                "originalText": "we discussed X",
                "generatedSummary": "X was discussed",
            },
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["summaryId"] == 1

        resp = await client.get("/api/summaries/1")
        assert resp.status_code == 200
        summary = resp.json()["summary"]
        assert summary["title"] == "Standup"
        assert summary["originalText"] == "we discussed X"
        assert summary["generatedSummary"] == "X was discussed"
        assert summary["editedSummary"] == "X was discussed"
        assert summary["customInstruction"] is None
        assert summary["createdAt"] == summary["updatedAt"]


@pytest.mark.asyncio
async def test_create_keeps_explicit_edited_summary(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.post(
            "/api/summaries",
            json={
                "title": "Retro",
                "originalText": "long transcript",
                "customInstruction": "bullet points",
                "generatedSummary": "generated",
                "editedSummary": "edited by hand",
            },
        )
        assert resp.status_code == 201

        summary = get_summary(test_app.context.db, resp.json()["summaryId"]).unwrap()
        assert summary.generated_summary == "generated"
        assert summary.edited_summary == "edited by hand"
        assert summary.custom_instruction == "bullet points"


@pytest.mark.asyncio
async def test_created_at_round_trip(test_app):
    before = datetime.now(timezone.utc)
    summary_id = save_summary(test_app)
    after = datetime.now(timezone.utc)

    async with get_test_client(test_app) as client:
        summary = (await client.get(f"/api/summaries/{summary_id}")).json()["summary"]

    created_at = datetime.fromisoformat(summary["createdAt"])
    assert created_at.utcoffset() == timedelta(0)
    assert before <= created_at <= after
    assert created_at == get_summary(test_app.context.db, summary_id).unwrap().created_at


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"originalText": "text", "generatedSummary": "summary"},
        {"title": "t", "generatedSummary": "summary"},
        {"title": "t", "originalText": "text"},
        {"title": "  ", "originalText": "text", "generatedSummary": "summary"},
    ],
)
async def test_create_requires_fields(body, test_app):
    async with get_test_client(test_app) as client:
        resp = await client.post("/api/summaries", json=body)
        assert resp.status_code == 400
        assert (
            resp.json()["error"]
            == "Title, original text, and generated summary are required"
        )

        resp = await client.get("/api/summaries")
        assert resp.json()["summaries"] == []


@pytest.mark.asyncio
async def test_create_rejects_blank_edited_summary(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.post(
            "/api/summaries",
            json={
                "title": "t",
                "originalText": "text",
                "generatedSummary": "summary",
                "editedSummary": "",
            },
        )
        assert resp.status_code == 400


@pytest.mark.asyncio
async def test_list_summaries_newest_first(test_app):
    first = save_summary(test_app, title="first")
    second = save_summary(test_app, title="second", edited_summary="changed")

    async with get_test_client(test_app) as client:
        resp = await client.get("/api/summaries")
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert [s["id"] for s in body["summaries"]] == [second, first]
        assert body["summaries"][1]["editedSummary"] == "X was discussed"
        assert body["summaries"][0]["editedSummary"] == "changed"


@pytest.mark.asyncio
async def test_update_edited_summary(test_app):
    summary_id = save_summary(test_app)

    async with get_test_client(test_app) as client:
        resp = await client.put(
            f"/api/summaries/{summary_id}",
            json={"editedSummary": "X was discussed further"},
        )
        assert resp.status_code == 200
        assert resp.json()["success"] is True

        summary = (await client.get(f"/api/summaries/{summary_id}")).json()["summary"]
        assert summary["editedSummary"] == "X was discussed further"
        assert summary["generatedSummary"] == "X was discussed"
        assert summary["title"] == "Standup"
        assert datetime.fromisoformat(summary["updatedAt"]) > datetime.fromisoformat(
            summary["createdAt"]
        )


@pytest.mark.asyncio
async def test_update_title_only_keeps_edited_summary(test_app):
    summary_id = save_summary(test_app, edited_summary="my edit")

    async with get_test_client(test_app) as client:
        resp = await client.put(
            f"/api/summaries/{summary_id}", json={"title": "Renamed"}
        )
        assert resp.status_code == 200

    summary = get_summary(test_app.context.db, summary_id).unwrap()
    assert summary.title == "Renamed"
    assert summary.edited_summary == "my edit"
    assert summary.updated_at > summary.created_at


@pytest.mark.asyncio
async def test_update_without_fields_is_bad_request(test_app):
    summary_id = save_summary(test_app)
    before = get_summary(test_app.context.db, summary_id).unwrap()

    async with get_test_client(test_app) as client:
        resp = await client.put(f"/api/summaries/{summary_id}", json={})
        assert resp.status_code == 400
        assert resp.json()["error"] == "At least one field to update is required"

    after = get_summary(test_app.context.db, summary_id).unwrap()
    assert after == before


@pytest.mark.asyncio
async def test_update_with_blank_field_is_bad_request(test_app):
    summary_id = save_summary(test_app)

    async with get_test_client(test_app) as client:
        resp = await client.put(
            f"/api/summaries/{summary_id}", json={"title": "ok", "editedSummary": " "}
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "editedSummary"

    assert get_summary(test_app.context.db, summary_id).unwrap().title == "Standup"


@pytest.mark.asyncio
async def test_update_unknown_summary(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.put("/api/summaries/42", json={"title": "nope"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "Summary not found"


@pytest.mark.asyncio
async def test_get_unknown_summary(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.get("/api/summaries/42")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Summary not found"


@pytest.mark.asyncio
async def test_non_numeric_id_is_bad_request(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.get("/api/summaries/abc")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request"


@pytest.mark.asyncio
async def test_delete_summary_removes_email_logs(test_app):
    summary_id = save_summary(test_app)
    other_id = save_summary(test_app, title="other")
    log_email(test_app.context.db, summary_id, ["a@example.com"], "Shared")
    log_email(test_app.context.db, other_id, ["b@example.com"], "Shared")

    async with get_test_client(test_app) as client:
        resp = await client.delete(f"/api/summaries/{summary_id}")
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "Summary deleted successfully",
        }

        resp = await client.get(f"/api/summaries/{summary_id}")
        assert resp.status_code == 404

    assert email_logs(test_app, summary_id) == []
    assert len(email_logs(test_app, other_id)) == 1


@pytest.mark.asyncio
async def test_delete_unknown_summary(test_app):
    async with get_test_client(test_app) as client:
        resp = await client.delete("/api/summaries/7")
        assert resp.status_code == 404


@pytest.mark.asyncio
async def test_ids_are_not_reused_after_delete(test_app):
    first = save_summary(test_app)

    async with get_test_client(test_app) as client:
        resp = await client.delete(f"/api/summaries/{first}")
        assert resp.status_code == 200

    second = save_summary(test_app)
    assert second > first


@pytest.mark.asyncio
async def test_storage_failure_is_reported(test_app, monkeypatch):
    def broken_fetch_all(query):
        raise StorageError("fetch_all failed: disk I/O error")

    monkeypatch.setattr(test_app.context.db, "fetch_all", broken_fetch_all)

    async with get_test_client(test_app) as client:
        resp = await client.get("/api/summaries")
        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Database operation failed",
            "message": "fetch_all failed: disk I/O error",
        }
