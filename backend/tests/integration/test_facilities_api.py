"""
API tests for facility and occupant endpoints with permission checks bypassed.
"""

import pytest


def _data(response):
    return response.get_json()["data"]


@pytest.fixture
def room(open_client):
    building = _data(open_client.post("/api/buildings", json={"name": "Main"}))
    floor = _data(
        open_client.post("/api/floors", json={"name": "Ground", "building_id": building["id"]})
    )
    return _data(open_client.post("/api/rooms", json={"name": "R1", "floor_id": floor["id"]}))


@pytest.fixture
def section(open_client):
    return _data(open_client.post("/api/sections", json={"name": "Outpatients"}))


class TestEnvelope:
    def test_success_envelope(self, open_client):
        response = open_client.post("/api/buildings", json={"name": "Main", "address": "1 High St"})

        assert response.status_code == 201
        body = response.get_json()
        assert set(body) == {"data", "message", "status", "success"}
        assert body["success"] is True
        assert body["status"] == 201
        assert body["data"]["address"] == "1 High St"

    def test_not_found_envelope(self, open_client):
        response = open_client.get("/api/buildings/404")

        assert response.status_code == 404
        body = response.get_json()
        assert body["success"] is False
        assert body["status"] == 404
        assert body["data"] is None

    def test_validation_envelope(self, open_client):
        response = open_client.post("/api/buildings", json={"description": "no name"})

        assert response.status_code == 400
        assert "name" in response.get_json()["message"]

    def test_non_json_body(self, open_client):
        response = open_client.post("/api/buildings", data="name=Main")
        assert response.status_code == 400

    def test_id_beyond_64_bits_is_404(self, open_client):
        response = open_client.get("/api/buildings/99999999999999999999")

        assert response.status_code == 404
        assert response.get_json()["success"] is False

    def test_nested_id_beyond_64_bits_is_404(self, open_client):
        response = open_client.get("/api/rooms/99999999999999999999/availability")
        assert response.status_code == 404

    def test_foreign_key_beyond_64_bits_is_400(self, open_client):
        response = open_client.post("/api/floors", json={"name": "Ground", "building_id": 10**20})

        assert response.status_code == 400
        assert "building_id" in response.get_json()["message"]

    def test_name_longer_than_column_is_400(self, open_client):
        response = open_client.post("/api/buildings", json={"name": "x" * 5000})

        assert response.status_code == 400
        assert open_client.get("/api/buildings").get_json()["data"] == []


class TestCrud:
    def test_building_lifecycle(self, open_client):
        created = _data(open_client.post("/api/buildings", json={"name": "Main"}))

        listed = _data(open_client.get("/api/buildings"))
        assert [b["name"] for b in listed] == ["Main"]

        updated = open_client.put(
            f"/api/buildings/{created['id']}", json={"description": "Old wing"}
        )
        assert updated.status_code == 200
        assert _data(updated)["name"] == "Main"
        assert _data(updated)["description"] == "Old wing"

        deleted = open_client.delete(f"/api/buildings/{created['id']}")
        assert deleted.status_code == 200
        assert open_client.get(f"/api/buildings/{created['id']}").status_code == 404

    def test_floor_requires_existing_building(self, open_client):
        response = open_client.post("/api/floors", json={"name": "Ground", "building_id": 77})

        assert response.status_code == 404
        assert "Building 77" in response.get_json()["message"]

    def test_building_with_floors_cannot_be_deleted(self, open_client, room):
        building_id = _data(open_client.get("/api/buildings"))[0]["id"]

        response = open_client.delete(f"/api/buildings/{building_id}")

        assert response.status_code == 409

    def test_update_missing_returns_404(self, open_client):
        response = open_client.put("/api/rooms/999", json={"name": "X"})
        assert response.status_code == 404

    def test_section_lists_clinic_and_warehouse_ids(self, open_client, room, section):
        clinic = _data(
            open_client.post(
                "/api/clinics",
                json={"name": "Cardiology", "section_id": section["id"], "room_id": room["id"]},
            )
        )

        shown = _data(open_client.get(f"/api/sections/{section['id']}"))

        assert shown["clinic_ids"] == [clinic["id"]]
        assert shown["warehouse_ids"] == []


class TestNestedRoutes:
    def test_building_floors(self, open_client, room):
        building_id = _data(open_client.get("/api/buildings"))[0]["id"]

        floors = _data(open_client.get(f"/api/buildings/{building_id}/floors"))

        assert [f["name"] for f in floors] == ["Ground"]

    def test_floor_rooms(self, open_client, room):
        rooms = _data(open_client.get(f"/api/floors/{room['floor_id']}/rooms"))
        assert [r["id"] for r in rooms] == [room["id"]]

    def test_missing_parent_is_404(self, open_client):
        assert open_client.get("/api/buildings/5/floors").status_code == 404

    def test_room_type_of_room(self, open_client, room):
        room_type = _data(open_client.post("/api/room-types", json={"name": "Ward"}))
        open_client.put(f"/api/rooms/{room['id']}", json={"room_type_id": room_type["id"]})

        response = open_client.get(f"/api/rooms/{room['id']}/room-type")

        assert response.status_code == 200
        assert _data(response)["name"] == "Ward"
        typed = _data(open_client.get(f"/api/room-types/{room_type['id']}/rooms"))
        assert [r["id"] for r in typed] == [room["id"]]

    def test_untyped_room_has_no_room_type(self, open_client, room):
        response = open_client.get(f"/api/rooms/{room['id']}/room-type")
        assert response.status_code == 404


class TestRoomOccupancy:
    def test_pharmacy_then_clinic_conflict(self, open_client, room, section):
        availability = _data(open_client.get(f"/api/rooms/{room['id']}/availability"))
        assert availability == {"room_id": room["id"], "available": True}

        pharmacy = open_client.post(
            "/api/pharmacies", json={"name": "Main Pharmacy", "room_id": room["id"]}
        )
        assert pharmacy.status_code == 201

        clinic = open_client.post(
            "/api/clinics",
            json={"name": "Cardiology", "section_id": section["id"], "room_id": room["id"]},
        )
        assert clinic.status_code == 409
        assert clinic.get_json()["success"] is False

        availability = _data(open_client.get(f"/api/rooms/{room['id']}/availability"))
        assert availability["available"] is False

    def test_claim_on_missing_room(self, open_client):
        response = open_client.post("/api/pharmacies", json={"name": "P", "room_id": 321})
        assert response.status_code == 404

    def test_moving_occupant_frees_old_room(self, open_client, room, section):
        other = _data(
            open_client.post("/api/rooms", json={"name": "R2", "floor_id": room["floor_id"]})
        )
        warehouse = _data(
            open_client.post(
                "/api/warehouses",
                json={"name": "Stores", "section_id": section["id"], "room_id": room["id"]},
            )
        )

        moved = open_client.put(f"/api/warehouses/{warehouse['id']}", json={"room_id": other["id"]})

        assert moved.status_code == 200
        assert _data(open_client.get(f"/api/rooms/{room['id']}/availability"))["available"] is True
        assert _data(open_client.get(f"/api/rooms/{other['id']}/availability"))["available"] is False

    def test_deleting_occupant_frees_room(self, open_client, room):
        pharmacy = _data(
            open_client.post("/api/pharmacies", json={"name": "P", "room_id": room["id"]})
        )

        assert open_client.delete(f"/api/rooms/{room['id']}").status_code == 409
        assert open_client.delete(f"/api/pharmacies/{pharmacy['id']}").status_code == 200
        assert open_client.delete(f"/api/rooms/{room['id']}").status_code == 200


class TestHealth:
    def test_health_reports_database_up(self, open_client):
        response = open_client.get("/health")

        assert response.status_code == 200
        assert _data(response) == {"database": "ok"}
