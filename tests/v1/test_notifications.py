"""Tests for notification endpoints."""

from fastapi import status

from askhub.services.notifications import notify


def test_list_and_mark_read(client, db_session, test_user, other_user, auth_token) -> None:
    first = notify(db_session, test_user.id, "answer", "first", from_user_id=other_user.id)
    notify(db_session, test_user.id, "answer", "second", from_user_id=other_user.id)

    listing = client.get("/api/v1/notifications", headers=auth_token)
    assert listing.status_code == status.HTTP_200_OK
    assert listing.json()["total"] == 2
    assert [item["message"] for item in listing.json()["items"]] == ["second", "first"]

    count = client.get("/api/v1/notifications/unread-count", headers=auth_token)
    assert count.json() == {"unread_count": 2}

    read = client.patch(f"/api/v1/notifications/{first.id}/read", headers=auth_token)
    assert read.json()["is_read"] is True

    unread = client.get("/api/v1/notifications?unread_only=true", headers=auth_token)
    assert [item["message"] for item in unread.json()["items"]] == ["second"]

    read_all = client.patch("/api/v1/notifications/read-all", headers=auth_token)
    assert read_all.json() == {"updated": 1}


def test_cannot_read_someone_elses(client, db_session, test_user, other_user, other_auth_token) -> None:
    mine = notify(db_session, test_user.id, "answer", "mine", from_user_id=other_user.id)

    response = client.patch(f"/api/v1/notifications/{mine.id}/read", headers=other_auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND
