from conftest import auth_headers


def create_plant(client, headers, **fields):
    response = client.post("/api/plants", headers=headers, json={"name": "Basil", **fields})
    assert response.status_code == 201, response.text
    return response.json()["plant"]


def test_plants_require_authentication(client):
    assert client.get("/api/plants").status_code == 401
    assert client.post("/api/plants", json={"name": "Basil"}).status_code == 401


def test_create_and_get_plant(client):
    headers = auth_headers(client)

    response = client.post(
        "/api/plants",
        headers=headers,
        json={"name": "Basil", "species": "Ocimum basilicum", "plantedDate": "2024-04-01T00:00:00Z"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Plant created successfully"
    plant = body["plant"]
    assert plant["healthStatus"] == "Unknown"
    assert plant["location"] == "Unknown"
    assert plant["diagnosisHistory"] == []
    assert plant["lastDiagnosis"] is None
    assert plant["plantedDate"].startswith("2024-04-01")

    fetched = client.get(f"/api/plants/{plant['id']}", headers=headers).json()["plant"]
    assert fetched == plant

    listing = client.get("/api/plants", headers=headers).json()
    assert listing["total"] == 1
    assert listing["plants"][0]["id"] == plant["id"]


def test_create_plant_requires_name(client):
    response = client.post("/api/plants", headers=auth_headers(client), json={"species": "Mint"})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_other_users_plants_are_invisible(client):
    owner = auth_headers(client, "owner")
    intruder = auth_headers(client, "intruder")
    plant = create_plant(client, owner)

    assert client.get(f"/api/plants/{plant['id']}", headers=intruder).status_code == 404
    assert client.put(f"/api/plants/{plant['id']}", headers=intruder, json={"name": "Mine"}).status_code == 404
    assert client.delete(f"/api/plants/{plant['id']}", headers=intruder).status_code == 404
    assert client.get("/api/plants", headers=intruder).json()["total"] == 0

    assert client.get(f"/api/plants/{plant['id']}", headers=owner).json()["plant"]["name"] == "Basil"


def test_update_and_delete(client):
    headers = auth_headers(client)
    plant = create_plant(client, headers, notes="water daily")

    updated = client.put(f"/api/plants/{plant['id']}", headers=headers, json={"location": "Balcony"})
    assert updated.status_code == 200
    assert updated.json()["plant"]["location"] == "Balcony"
    assert updated.json()["plant"]["notes"] == "water daily"

    deleted = client.delete(f"/api/plants/{plant['id']}", headers=headers)
    assert deleted.json()["message"] == "Plant deleted successfully"
    assert client.get(f"/api/plants/{plant['id']}", headers=headers).status_code == 404


def test_add_diagnosis_updates_health(client):
    headers = auth_headers(client)
    plant = create_plant(client, headers)

    response = client.post(
        f"/api/plants/{plant['id']}/diagnosis",
        headers=headers,
        json={"disease": "early_blight", "confidence": 0.85, "notes": "brown rings"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Diagnosis added successfully"
    assert body["diagnosis"]["disease"] == "early_blight"
    assert body["plant"]["healthStatus"] == "Diseased"
    assert body["plant"]["lastDiagnosis"]["id"] == body["diagnosis"]["id"]

    client.post(f"/api/plants/{plant['id']}/diagnosis", headers=headers, json={"disease": "healthy", "confidence": 0.3})
    history = client.get(f"/api/plants/{plant['id']}/diagnosis", headers=headers).json()["diagnosisHistory"]
    assert [entry["disease"] for entry in history] == ["early_blight", "healthy"]
    assert client.get(f"/api/plants/{plant['id']}", headers=headers).json()["plant"]["healthStatus"] == "Healthy"


def test_add_diagnosis_rejects_bad_values(client):
    headers = auth_headers(client)
    plant = create_plant(client, headers)

    out_of_range = client.post(
        f"/api/plants/{plant['id']}/diagnosis", headers=headers, json={"disease": "rust", "confidence": 1.5}
    )
    assert out_of_range.status_code == 400

    not_a_number = client.post(
        f"/api/plants/{plant['id']}/diagnosis", headers=headers, json={"disease": "rust", "confidence": "high"}
    )
    assert not_a_number.status_code == 400
    body = not_a_number.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["field"] == "confidence"

    boolean = client.post(
        f"/api/plants/{plant['id']}/diagnosis", headers=headers, json={"disease": "rust", "confidence": True}
    )
    assert boolean.status_code == 400
    assert client.get(f"/api/plants/{plant['id']}/diagnosis", headers=headers).json()["diagnosisHistory"] == []


def test_health_summary_search_and_status(client):
    headers = auth_headers(client)
    sick = create_plant(client, headers, name="Tomato", location="Greenhouse")
    create_plant(client, headers, name="Fern", notes="greenhouse corner")
    create_plant(client, headers, name="Cactus", location="Desk")
    client.post(f"/api/plants/{sick['id']}/diagnosis", headers=headers, json={"disease": "late_blight", "confidence": 0.4})

    summary = client.get("/api/plants/health/summary", headers=headers).json()["summary"]
    assert summary == {
        "total": 3,
        "healthy": 0,
        "diseased": 0,
        "suspicious": 1,
        "unknown": 2,
        "plantsNeedingAttention": 1,
    }

    found = client.get("/api/plants/search", headers=headers, params={"q": "GREENHOUSE"}).json()
    assert sorted(plant["name"] for plant in found["plants"]) == ["Fern", "Tomato"]
    assert client.get("/api/plants/search", headers=headers).status_code == 400

    suspicious = client.get("/api/plants/status/Suspicious", headers=headers).json()
    assert suspicious["status"] == "Suspicious"
    assert [plant["name"] for plant in suspicious["plants"]] == ["Tomato"]
    assert client.get("/api/plants/status/suspicious", headers=headers).status_code == 400
