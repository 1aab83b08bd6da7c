"""Tests for question endpoints."""

from fastapi import status
from sqlalchemy import select

from askhub.models import Notification, Report


def test_create_question(client, auth_token, test_user) -> None:
    response = client.post(
        "/api/v1/questions",
        json={"title": "Why?", "description": "Because.", "tags": ["meta"]},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["owner_id"] == test_user.id
    assert data["tags"] == ["meta"]


def test_create_question_too_many_tags(client, auth_token) -> None:
    response = client.post(
        "/api/v1/questions",
        json={"title": "Why?", "description": "Because.", "tags": list("abcdef")},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_spam_question_gets_system_report(client, db_session, auth_token) -> None:
    response = client.post(
        "/api/v1/questions",
        json={
            "title": "BUY NOW CLICK HERE",
            "description": "http://a http://b http://c http://d",
            "tags": ["deals"],
        },
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    report = db_session.scalars(select(Report)).one()
    assert report.reported_by is None
    assert report.target_id == response.json()["id"]


def test_answer_question_notifies_owner(
    client, db_session, test_question, other_auth_token, test_user
) -> None:
    response = client.post(
        f"/api/v1/questions/{test_question.id}/answers",
        json={"body": "Use pathlib."},
        headers=other_auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["votes"] == 0

    notification = db_session.scalars(
        select(Notification).where(Notification.user_id == test_user.id)
    ).one()
    assert notification.type == "answer"
    assert notification.answer_id == response.json()["id"]


def test_get_question_lists_accepted_first(
    client, test_question, make_answer, other_user, make_user, auth_token
) -> None:
    first = make_answer(other_user, "first")
    second = make_answer(make_user(), "second")
    client.patch(f"/api/v1/answers/{second.id}/accept", headers=auth_token)

    response = client.get(f"/api/v1/questions/{test_question.id}")

    assert response.status_code == status.HTTP_200_OK
    assert [a["id"] for a in response.json()["answers"]] == [second.id, first.id]


def test_get_missing_question(client) -> None:
    response = client.get("/api/v1/questions/404")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_trending(client, test_question, test_answer) -> None:
    response = client.get("/api/v1/questions/trending")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data[0]["question"]["id"] == test_question.id
    assert data[0]["answer_count"] == 1


def test_delete_question(client, test_question, auth_token, other_auth_token) -> None:
    assert client.delete(
        f"/api/v1/questions/{test_question.id}", headers=other_auth_token
    ).status_code == status.HTTP_403_FORBIDDEN

    response = client.delete(f"/api/v1/questions/{test_question.id}", headers=auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/questions/{test_question.id}").status_code == 404


def test_get_question_increments_views(client, test_question) -> None:
    client.get(f"/api/v1/questions/{test_question.id}")
    response = client.get(f"/api/v1/questions/{test_question.id}")

    assert response.json()["views"] == 2


def test_update_question(client, test_question, auth_token, other_auth_token) -> None:
    payload = {"title": " Edited ", "description": "Edited body", "tags": ["python"]}

    response = client.patch(
        f"/api/v1/questions/{test_question.id}", json=payload, headers=other_auth_token
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["kind"] == "forbidden"

    response = client.patch(
        f"/api/v1/questions/{test_question.id}", json=payload, headers=auth_token
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Edited"
    assert data["tags"] == ["python"]

    response = client.patch(
        f"/api/v1/questions/{test_question.id}",
        json={**payload, "description": "   "},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
