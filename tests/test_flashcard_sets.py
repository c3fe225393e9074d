"""Tests for the /flashcard-sets endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.flashcard import Flashcard
from models.study_progress import StudyProgress


class TestListFlashcardSets:
    def test_lists_sets_with_visible_cards(self, client: TestClient, db_session: Session, make_set) -> None:
        older, _ = make_set(db_session, title="Older")
        newer, cards = make_set(db_session, title="Newer", cards=(("Q1", "A1"), ("Q2", "A2")))
        client.delete(f"/flashcards/{cards[0].id}")

        response = client.get("/flashcard-sets")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        by_id = {item["id"]: item for item in data["sets"]}
        assert set(by_id) == {older.id, newer.id}
        assert [card["question"] for card in by_id[newer.id]["flashcards"]] == ["Q2"]
        assert len(by_id[older.id]["flashcards"]) == 3
        assert by_id[newer.id]["flip_mode"] == 0
        assert data["sets"][0]["id"] == newer.id

    def test_empty_store(self, client: TestClient) -> None:
        response = client.get("/flashcard-sets")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "sets": []}


class TestUpdateFlashcardSet:
    def test_empty_body_is_rejected(self, client: TestClient, db_session: Session, make_set) -> None:
        flashcard_set, _ = make_set(db_session)

        for kwargs in ({}, {"json": {}}):
            response = client.patch(f"/flashcard-sets/{flashcard_set.id}", **kwargs)
            assert response.status_code == status.HTTP_400_BAD_REQUEST
            assert "At least one field" in response.json()["error"]

    def test_title_only(self, client: TestClient, db_session: Session, make_set) -> None:
        flashcard_set, _ = make_set(db_session, title="Old", description="Keep me")

        response = client.patch(f"/flashcard-sets/{flashcard_set.id}", json={"title": "New"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "New"
        assert data["description"] == "Keep me"
        assert data["flip_mode"] == 0

    def test_flip_mode_accepts_bool_and_keeps_cards(
        self, client: TestClient, db_session: Session, make_set
    ) -> None:
        flashcard_set, cards = make_set(db_session)

        response = client.patch(f"/flashcard-sets/{flashcard_set.id}", json={"flip_mode": True})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["flip_mode"] == 1
        listed = client.get("/flashcard-sets").json()["sets"][0]["flashcards"]
        assert [(c["question"], c["answer"], c["order_index"]) for c in listed] == [
            (c.question, c.answer, c.order_index) for c in cards
        ]

        response = client.patch(f"/flashcard-sets/{flashcard_set.id}", json={"flip_mode": 0})
        assert response.json()["flip_mode"] == 0

    def test_invalid_flip_mode(self, client: TestClient, db_session: Session, make_set) -> None:
        flashcard_set, _ = make_set(db_session)

        response = client.patch(f"/flashcard-sets/{flashcard_set.id}", json={"flip_mode": 5})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "flip_mode" in response.json()["error"]

    def test_not_found(self, client: TestClient) -> None:
        response = client.patch("/flashcard-sets/99999", json={"title": "Nope"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Flashcard set not found"


class TestDeleteFlashcardSet:
    def test_missing_id(self, client: TestClient) -> None:
        response = client.delete("/flashcard-sets")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Set ID is required"

    def test_delete_cascades(self, client: TestClient, db_session: Session, make_set) -> None:
        flashcard_set, cards = make_set(db_session)
        client.post(
            "/study-progress",
            json={"setId": flashcard_set.id, "flashcardId": cards[0].id, "dontKnow": True},
        )

        response = client.delete("/flashcard-sets", params={"id": flashcard_set.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        assert client.get("/flashcard-sets").json()["sets"] == []
        assert db_session.scalar(select(func.count()).select_from(Flashcard)) == 0
        assert db_session.scalar(select(func.count()).select_from(StudyProgress)) == 0

    def test_delete_missing_set_is_lenient(self, client: TestClient) -> None:
        response = client.delete("/flashcard-sets", params={"id": 424242})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
