"""Tests for the HTTP API."""
import httpx
import pytest

from faceledger.core.exceptions import InvalidImageError
from faceledger.infrastructure.dependencies import get_orchestrator
from faceledger.main import app


@pytest.fixture
async def client(orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class TestRegister:

    async def test_register_face(self, client, extractor):
        extractor.add_image("alice.jpg", [0.1, 0.2, 0.3])

        response = await client.post("/api/register", json={"name": "Alice", "image_path": "alice.jpg"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Face registered successfully for Alice"
        assert isinstance(body["face_id"], int)

    async def test_register_without_face(self, client, extractor):
        extractor.add_image("empty.jpg")

        response = await client.post("/api/register", json={"name": "Alice", "image_path": "empty.jpg"})

        assert response.status_code == 400
        assert response.json()["detail"] == "No face detected in the provided image"

    async def test_register_with_several_faces(self, client, extractor):
        extractor.add_image("group.jpg", [0.1, 0.2, 0.3], [0.3, 0.2, 0.1])

        response = await client.post("/api/register", json={"name": "Alice", "image_path": "group.jpg"})

        assert response.status_code == 400
        assert "Multiple faces" in response.json()["detail"]

    async def test_register_requires_name_and_path(self, client):
        response = await client.post("/api/register", json={"name": "Alice"})

        assert response.status_code == 400

    async def test_unreadable_image(self, client, extractor):
        extractor.fail_on("missing.jpg", InvalidImageError("Image could not be read: missing.jpg"))

        response = await client.post("/api/register", json={"name": "Alice", "image_path": "missing.jpg"})

        assert response.status_code == 422
        assert response.json()["detail"] == "Image could not be read: missing.jpg"

    async def test_bad_input_and_extractor_failure_have_distinct_statuses(self, client, extractor):
        extractor.fail_on("corrupt.jpg", InvalidImageError("Failed to decode image"))

        missing_path = await client.post("/api/register", json={"name": "Alice"})
        bad_threshold = await client.post("/api/recognize", json={"image_path": "q.jpg", "threshold": -1})
        corrupt = await client.post("/api/register", json={"name": "Alice", "image_path": "corrupt.jpg"})

        assert missing_path.status_code == bad_threshold.status_code == 400
        assert corrupt.status_code == 422
        assert isinstance(missing_path.json()["detail"], list)


class TestRecognize:

    async def test_recognize_enrolled_face(self, client, extractor):
        extractor.add_image("bob.jpg", [0.1, 0.2, 0.3])
        extractor.add_image("query.jpg", [0.1, 0.2, 0.31])
        await client.post("/api/register", json={"name": "Bob", "image_path": "bob.jpg"})

        response = await client.post("/api/recognize", json={"image_path": "query.jpg", "threshold": 0.5})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["results"]) == 1
        result = body["results"][0]
        assert result["name"] == "Bob"
        assert result["is_matched"] is True
        assert result["confidence"] == pytest.approx(99.0)
        assert result["distance"] == pytest.approx(0.01, abs=1e-6)

    async def test_recognize_against_empty_store(self, client, extractor):
        extractor.add_image("query.jpg", [0.1, 0.2, 0.3])

        response = await client.post("/api/recognize", json={"image_path": "query.jpg"})

        result = response.json()["results"][0]
        assert result == {
            "name": "Unknown",
            "confidence": 0.0,
            "is_matched": False,
            "distance": None,
            "face_id": None,
        }

    async def test_recognize_without_face(self, client, extractor):
        extractor.add_image("empty.jpg")

        response = await client.post("/api/recognize", json={"image_path": "empty.jpg"})

        assert response.status_code == 400

    async def test_negative_threshold_is_rejected(self, client):
        response = await client.post("/api/recognize", json={"image_path": "query.jpg", "threshold": -1})

        assert response.status_code == 400


class TestFacesAndHistory:

    async def test_list_faces(self, client, extractor):
        extractor.add_image("alice.jpg", [0.1, 0.2, 0.3])
        extractor.add_image("bob.jpg", [0.3, 0.2, 0.1])
        await client.post("/api/register", json={"name": "Alice", "image_path": "alice.jpg"})
        await client.post("/api/register", json={"name": "Bob", "image_path": "bob.jpg"})

        response = await client.get("/api/faces")

        body = response.json()
        assert body["count"] == 2
        assert [face["name"] for face in body["faces"]] == ["Alice", "Bob"]
        assert "descriptor" not in body["faces"][0]

    async def test_history_newest_first_with_limit(self, client, extractor):
        extractor.add_image("alice.jpg", [0.1, 0.2, 0.3])
        extractor.add_image("stranger.jpg", [5.0, 5.0, 5.0])
        await client.post("/api/register", json={"name": "Alice", "image_path": "alice.jpg"})
        await client.post("/api/recognize", json={"image_path": "alice.jpg"})
        await client.post("/api/recognize", json={"image_path": "stranger.jpg"})

        response = await client.get("/api/history", params={"limit": 1})

        body = response.json()
        assert body["count"] == 1
        entry = body["history"][0]
        assert entry["matched_name"] == "Alice"
        assert entry["status"] == "unmatched"

    async def test_history_rejects_zero_limit(self, client):
        response = await client.get("/api/history", params={"limit": 0})

        assert response.status_code == 400

    async def test_delete_face(self, client, extractor):
        extractor.add_image("alice.jpg", [0.1, 0.2, 0.3])
        registered = await client.post("/api/register", json={"name": "Alice", "image_path": "alice.jpg"})
        face_id = registered.json()["face_id"]

        response = await client.delete(f"/api/faces/{face_id}")

        assert response.status_code == 200
        assert response.json()["message"] == f"Face with ID {face_id} deleted successfully"
        assert (await client.get("/api/faces")).json()["count"] == 0

    async def test_delete_unknown_face(self, client):
        response = await client.delete("/api/faces/999")

        assert response.status_code == 404


async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
