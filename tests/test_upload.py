"""Tests for POST /upload."""

import hashlib

from fastapi import status
from fastapi.testclient import TestClient

from core.config import Settings


class TestUpload:
    def test_stores_file_and_row(self, client: TestClient, settings: Settings, png_bytes: bytes) -> None:
        response = client.post("/upload", files={"file": ("Homework Page.PNG", png_bytes, "image/png")})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        image = data["image"]
        stored_name = f"{hashlib.md5(png_bytes).hexdigest()}.png"
        assert image["filename"] == "Homework Page.PNG"
        assert image["filepath"] == f"/uploads/{stored_name}"
        assert image["mime_type"] == "image/png"
        assert image["size"] == len(png_bytes)
        assert (settings.UPLOAD_DIR / stored_name).read_bytes() == png_bytes

    def test_uploaded_file_is_served(self, client: TestClient, upload, png_bytes: bytes) -> None:
        image = upload()

        response = client.get(image["filepath"])

        assert response.status_code == status.HTTP_200_OK
        assert response.content == png_bytes

    def test_same_content_twice_gives_two_rows(self, upload) -> None:
        first = upload()
        second = upload()

        assert first["id"] != second["id"]
        assert first["filepath"] == second["filepath"]

    def test_rejects_non_images(self, client: TestClient) -> None:
        response = client.post("/upload", files={"file": ("notes.txt", b"hello", "text/plain")})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Only image files are allowed"

    def test_rejects_empty_file(self, client: TestClient) -> None:
        response = client.post("/upload", files={"file": ("empty.png", b"", "image/png")})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_a_file(self, client: TestClient) -> None:
        response = client.post("/upload")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "No file provided"
