from agroscore.models import Profile

API = "/api/v1"


def test_profile_is_created_on_first_read(client, db, auth_headers):
    response = client.get(f"{API}/profile", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["profile"]["id"] == "user-uuid-1234"
    assert data["profile"]["name"] == "farmer"
    assert data["profile"]["preferredLanguage"] == "en"
    assert data["farms"] == []
    assert db.query(Profile).count() == 1


def test_update_profile(client, auth_headers):
    response = client.put(
        f"{API}/profile", json={"name": "Asha", "region": "Punjab", "preferredLanguage": "hi"}, headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["region"] == "Punjab"
    assert response.json()["preferredLanguage"] == "hi"


def test_farm_field_crop_chain(client, auth_headers):
    farm = client.post(
        f"{API}/farms", json={"name": "River Farm", "primaryCrops": ["Wheat"]}, headers=auth_headers,
    ).json()
    assert farm["id"].startswith("fm_")

    field = client.post(
        f"{API}/fields",
        json={"farmId": farm["id"], "name": "East", "areaHectares": 1.5, "soilType": "loamy"},
        headers=auth_headers,
    ).json()
    assert field["irrigationType"] == "other"

    crop = client.post(
        f"{API}/crops", json={"fieldId": field["id"], "name": "Wheat", "sowingDate": "2024-11-01"}, headers=auth_headers,
    ).json()
    assert crop["currentStage"] == "unknown"

    renamed = client.post(
        f"{API}/farms", json={"id": farm["id"], "name": "River Farm North"}, headers=auth_headers,
    ).json()
    assert renamed["id"] == farm["id"]
    assert renamed["primaryCrops"] == []

    overview = client.get(f"{API}/profile", headers=auth_headers).json()
    (listed,) = overview["farms"]
    assert listed["name"] == "River Farm North"
    assert listed["fields"][0]["crops"][0]["name"] == "Wheat"


def test_missing_names_are_rejected(client, auth_headers):
    response = client.post(f"{API}/farms", json={}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Farm name is required"}

    response = client.post(f"{API}/fields", json={"name": "Orphan"}, headers=auth_headers)
    assert response.json() == {"error": "Field name and farm_id are required"}


def test_cannot_add_field_to_foreign_farm(client, other_headers, field_setup):
    response = client.post(
        f"{API}/fields", json={"farmId": field_setup["farm"].id, "name": "Intruder"}, headers=other_headers,
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Farm not found or access denied"}


def test_record_sensor_reading(client, auth_headers, other_headers, field_setup):
    body = {"fieldId": field_setup["field"].id, "temperature": 24, "humidity": 55, "soilMoisture": 48, "soilPh": 6.7}

    response = client.post(f"{API}/sensor-readings", json=body, headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["id"].startswith("rd_")
    assert response.json()["soilMoisture"] == 48

    assert client.post(f"{API}/sensor-readings", json=body, headers=other_headers).status_code == 403
    bad = dict(body, humidity=120)
    assert client.post(f"{API}/sensor-readings", json=bad, headers=auth_headers).status_code == 400
