import asyncio

import pytest

from conftest import auth_headers, png_bytes
from plantpal.modules.diagnosis.presentation.api.v1.diagnosis import read_upload


def upload(client, headers, path="/api/diagnosis/upload", filename="leaf.png", content_type="image/png", data=None):
    data = png_bytes() if data is None else data
    return client.post(path, headers=headers, files={"image": (filename, data, content_type)})


@pytest.mark.parametrize("path", ["/api/diagnosis/upload", "/api/diagnosis/analyze"])
def test_upload_returns_diagnosis(client, classifier, upload_dir, path):
    response = upload(client, auth_headers(client), path=path)

    assert response.status_code == 200, response.text
    body = response.json()
    diagnosis = body["diagnosis"]
    assert diagnosis["disease"] == "early_blight"
    assert diagnosis["confidence"] == 0.85
    assert [p["disease"] for p in diagnosis["predictions"]] == ["early_blight", "healthy", "late_blight"]
    assert diagnosis["recommendations"]
    assert diagnosis["plantInfo"]["name"] == "Tomato Plant"
    assert body["timestamp"]
    assert len(classifier.seen) == 1
    assert list(upload_dir.iterdir()) == []


def test_upload_requires_authentication(client):
    assert upload(client, {}).status_code == 401


def test_upload_without_file(client):
    response = client.post("/api/diagnosis/upload", headers=auth_headers(client))

    assert response.status_code == 400
    assert response.json()["error"] == "No image file provided"


@pytest.mark.parametrize(
    "filename, content_type, data",
    [
        ("notes.txt", "text/plain", b"hello"),
        ("leaf.png", "image/png", b"not really a png"),
        ("leaf.bmp", "image/bmp", None),
    ],
)
def test_upload_rejects_non_images(client, classifier, filename, content_type, data):
    response = upload(client, auth_headers(client), filename=filename, content_type=content_type, data=data)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_FILE_TYPE"
    assert classifier.seen == []


def test_upload_too_large(client, app):
    app.state.container.diagnosis_service.file_manager.max_size = 10

    response = upload(client, auth_headers(client))

    assert response.status_code == 400
    assert response.json()["code"] == "FILE_TOO_LARGE"


def test_classifier_failure_is_500_and_cleans_up(client, classifier, upload_dir):
    classifier.error = RuntimeError("model exploded")

    response = upload(client, auth_headers(client))

    assert response.status_code == 500
    assert response.json()["code"] == "CLASSIFICATION_ERROR"
    assert list(upload_dir.iterdir()) == []


# =============================================================================
# SAVED RECORDS
# =============================================================================

def save(client, headers, **fields):
    payload = {"disease": "early_blight", "confidence": 0.85, **fields}
    return client.post("/api/diagnosis", headers=headers, json=payload)


def test_save_and_fetch_record(client):
    headers = auth_headers(client)

    response = save(
        client,
        headers,
        predictions=[{"disease": "early_blight", "confidence": 0.85}],
        recommendations=["Remove affected leaves"],
        plantInfo={"name": "Tomato Plant"},
        timestamp="2024-05-01T10:00:00Z",
    )
    assert response.status_code == 201
    record = response.json()["diagnosis"]
    assert record["userId"]
    assert record["plantInfo"] == {"name": "Tomato Plant"}
    assert record["timestamp"].startswith("2024-05-01T10:00:00")

    fetched = client.get(f"/api/diagnosis/{record['id']}", headers=headers)
    assert fetched.json()["diagnosis"] == record


def test_save_record_validation(client):
    headers = auth_headers(client)

    assert save(client, headers, confidence=None).status_code == 400
    assert save(client, headers, confidence=3).status_code == 400
    assert save(client, headers, disease="").status_code == 400

    out_of_range = save(client, headers, timestamp=1e20)
    assert out_of_range.status_code == 400
    assert out_of_range.json()["code"] == "VALIDATION_ERROR"


def test_history_is_private_and_newest_first(client):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bobby")
    first = save(client, alice, timestamp="2024-05-01T10:00:00Z").json()["diagnosis"]
    second = save(client, alice, disease="healthy", confidence=0.9, timestamp="2024-05-02T10:00:00Z").json()["diagnosis"]

    history = client.get("/api/diagnosis/history", headers=alice).json()["history"]
    assert [record["id"] for record in history] == [second["id"], first["id"]]

    assert client.get("/api/diagnosis/history", headers=bob).json()["history"] == []
    assert client.get(f"/api/diagnosis/{first['id']}", headers=bob).status_code == 404
    assert client.delete(f"/api/diagnosis/{first['id']}", headers=bob).status_code == 404


def test_delete_record(client):
    headers = auth_headers(client)
    record = save(client, headers).json()["diagnosis"]

    response = client.delete(f"/api/diagnosis/{record['id']}", headers=headers)
    assert response.json() == {"success": True, "message": "Diagnosis deleted successfully"}
    assert client.get(f"/api/diagnosis/{record['id']}", headers=headers).status_code == 404


def test_stats_overview(client):
    headers = auth_headers(client)
    save(client, headers, disease="healthy", confidence=0.9)
    save(client, headers, disease="rust", confidence=0.6)
    save(client, headers, disease="rust", confidence=0.7)

    stats = client.get("/api/diagnosis/stats/overview", headers=headers).json()["stats"]
    assert stats == {
        "totalDiagnoses": 3,
        "healthyCount": 1,
        "diseasedCount": 2,
        "mostCommonDisease": "rust",
        "averageConfidence": pytest.approx(0.7333, abs=1e-4),
    }


def test_upload_read_stops_past_size_cap():
    class CountingUpload:
        def __init__(self, data):
            self.data = data
            self.requested = None
            self.closed = False

        async def read(self, size=-1):
            self.requested = size
            return self.data if size < 0 else self.data[:size]

        async def close(self):
            self.closed = True

    upload = CountingUpload(b"x" * 5000)

    data = asyncio.run(read_upload(upload, max_size=100))

    assert upload.requested == 101
    assert len(data) == 101
    assert upload.closed
