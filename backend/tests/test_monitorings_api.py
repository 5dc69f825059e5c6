from decimal import Decimal

import pytest

API = "/api/v1"


@pytest.fixture()
def station(client, auth_headers, reference):
    response = client.post(
        f"{API}/monitoring-stations/",
        json={"basin_section_id": reference["basin_section_id"], "name": "EST-01 Bridge",
              "latitude": "6.15", "longitude": "-75.37"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


def _monitoring(station_id, monitoring_date="2025-03-10", **overrides):
    body = {
        "monitoring_station_id": station_id,
        "monitoring_date": monitoring_date,
        "weather_conditions": "Cloudy",
        "performed_by": "Field team A",
        "od": "80", "sst": "100", "dqo": "30", "ce": "100", "ph": "7.5",
        "caudal_volumen": "100",
    }
    body.update(overrides)
    return body


def _create(client, headers, body):
    return client.post(f"{API}/monitorings/", json=body, headers=headers)


def test_station_name_unique_per_corporation(client, auth_headers, station, reference):
    response = client.post(
        f"{API}/monitoring-stations/",
        json={"basin_section_id": reference["basin_section_id"], "name": "EST-01 Bridge"},
        headers=auth_headers,
    )

    assert response.status_code == 400


def test_station_needs_own_basin_section(client, other_headers, reference):
    response = client.post(
        f"{API}/monitoring-stations/",
        json={"basin_section_id": reference["basin_section_id"], "name": "Foreign"},
        headers=other_headers,
    )

    assert response.status_code == 404


def test_create_monitoring_computes_quality(client, auth_headers, station):
    response = _create(client, auth_headers, _monitoring(station["id"]))

    assert response.status_code == 201
    data = response.json()
    assert data["number_ica_variables"] == 5
    assert Decimal(data["ica_coefficient"]) == Decimal("0.753")
    assert data["quality_classification"] == "ACCEPTABLE"
    assert data["irnp"] is None


def test_six_variables_with_nutrient_ratio(client, auth_headers, station):
    response = _create(client, auth_headers, _monitoring(station["id"], n="16", p="1"))

    data = response.json()
    assert Decimal(data["rnp"]) == Decimal("16")
    assert data["number_ica_variables"] == 6
    assert Decimal(data["ica_coefficient"]) == Decimal("0.756")


def test_one_monitoring_per_station_and_date(client, auth_headers, station):
    assert _create(client, auth_headers, _monitoring(station["id"])).status_code == 201

    response = _create(client, auth_headers, _monitoring(station["id"]))

    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_RESOURCE"
    assert _create(client, auth_headers, _monitoring(station["id"], "2025-03-11")).status_code == 201


def test_missing_measurement_rejected(client, auth_headers, station):
    body = _monitoring(station["id"])
    del body["ph"]

    assert _create(client, auth_headers, body).status_code == 422


def test_update_recomputes_indices(client, auth_headers, station):
    created = _create(client, auth_headers, _monitoring(station["id"])).json()

    response = client.put(f"{API}/monitorings/{created['id']}", json={"od": "100"}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["iod"]) == Decimal("1")
    assert Decimal(data["ica_coefficient"]) == Decimal("0.793")

    cleared = client.put(f"{API}/monitorings/{created['id']}", json={"od": None}, headers=auth_headers)
    assert cleared.status_code == 422


def test_update_to_taken_date_rejected(client, auth_headers, station):
    _create(client, auth_headers, _monitoring(station["id"], "2025-03-10"))
    second = _create(client, auth_headers, _monitoring(station["id"], "2025-04-10")).json()

    response = client.put(f"{API}/monitorings/{second['id']}", json={"monitoring_date": "2025-03-10"},
                          headers=auth_headers)

    assert response.status_code == 409


def test_by_station_latest_and_date_range(client, auth_headers, station):
    for day in ("2025-01-15", "2025-06-15", "2025-03-15"):
        _create(client, auth_headers, _monitoring(station["id"], day))

    by_station = client.get(f"{API}/monitorings/by-station/{station['id']}", headers=auth_headers).json()
    assert [item["monitoring_date"] for item in by_station["items"]] == ["2025-06-15", "2025-03-15", "2025-01-15"]

    latest = client.get(f"{API}/monitorings/by-station/{station['id']}/latest", headers=auth_headers)
    assert latest.json()["monitoring_date"] == "2025-06-15"

    in_range = client.get(
        f"{API}/monitorings/",
        params={"start_date": "2025-02-01", "end_date": "2025-06-30"},
        headers=auth_headers,
    ).json()
    assert in_range["total"] == 2

    backwards = client.get(
        f"{API}/monitorings/",
        params={"start_date": "2025-06-30", "end_date": "2025-02-01"},
        headers=auth_headers,
    )
    assert backwards.status_code == 400


def test_latest_without_monitorings(client, auth_headers, station):
    response = client.get(f"{API}/monitorings/by-station/{station['id']}/latest", headers=auth_headers)

    assert response.status_code == 404


def test_stations_with_last_monitoring(client, auth_headers, station, reference):
    client.post(
        f"{API}/monitoring-stations/",
        json={"basin_section_id": reference["basin_section_id"], "name": "EST-02 Never sampled"},
        headers=auth_headers,
    )
    _create(client, auth_headers, _monitoring(station["id"], "2025-01-15"))
    _create(client, auth_headers, _monitoring(station["id"], "2025-05-15", od="90"))

    response = client.get(
        f"{API}/monitoring-stations/with-last-monitoring",
        params={"basin_section_id": reference["basin_section_id"], "name": "est"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data] == ["EST-01 Bridge"]
    assert data[0]["last_monitoring"]["monitoring_date"] == "2025-05-15"
    assert Decimal(data[0]["last_monitoring"]["od"]) == Decimal("90")


def test_stations_with_last_monitoring_all_inactive(client, auth_headers, station, reference):
    client.put(f"{API}/monitoring-stations/{station['id']}", json={"is_active": False}, headers=auth_headers)

    response = client.get(
        f"{API}/monitoring-stations/with-last-monitoring",
        params={"basin_section_id": reference["basin_section_id"]},
        headers=auth_headers,
    )

    assert response.status_code == 400


def test_station_and_section_in_use_cannot_be_deleted(client, auth_headers, station, reference):
    _create(client, auth_headers, _monitoring(station["id"]))

    assert client.delete(f"{API}/monitoring-stations/{station['id']}", headers=auth_headers).status_code == 409
    section_url = f"{API}/water-basins/{reference['water_basin_id']}/sections/{reference['basin_section_id']}"
    assert client.delete(section_url, headers=auth_headers).status_code == 409


def test_monitorings_are_per_corporation(client, auth_headers, other_headers, station):
    created = _create(client, auth_headers, _monitoring(station["id"])).json()

    assert client.get(f"{API}/monitorings/{created['id']}", headers=other_headers).status_code == 404
    assert client.get(f"{API}/monitorings/", headers=other_headers).json()["total"] == 0
    assert _create(client, other_headers, _monitoring(station["id"], "2025-07-01")).status_code == 404


def test_stats(client, auth_headers, station):
    _create(client, auth_headers, _monitoring(station["id"], "2025-01-15"))
    _create(client, auth_headers, _monitoring(station["id"], "2025-02-15", od="100"))
    _create(client, auth_headers, _monitoring(station["id"], "2024-12-15"))

    stats = client.get(f"{API}/monitorings/stats", params={"year": 2025}, headers=auth_headers).json()

    assert stats["active_stations"] == 1
    assert stats["total_monitorings"] == 3
    assert stats["monitorings_this_year"] == 2
    assert stats["by_quality"] == {"ACCEPTABLE": 3}


def test_viewer_cannot_register(client, viewer_headers, station):
    assert _create(client, viewer_headers, _monitoring(station["id"])).status_code == 403
