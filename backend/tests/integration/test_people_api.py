"""
API tests for personnel, patient care and supply endpoints.
"""

import pytest

from hms.db.base import User
from hms.core.security import hash_password


def _data(response):
    return response.get_json()["data"]


@pytest.fixture
def make_user(db_session):
    def _make(email):
        user = User(name=email.split("@")[0], email=email, password_hash=hash_password("pw"))
        db_session.add(user)
        db_session.commit()
        return user.id

    return _make


@pytest.fixture
def specialization(open_client):
    return _data(
        open_client.post(
            "/api/specializations", json={"name": "Cardiology", "type": "doctor"}
        )
    )


@pytest.fixture
def doctor(open_client, make_user, specialization):
    return _data(
        open_client.post(
            "/api/doctors",
            json={
                "specialization_id": specialization["id"],
                "user_id": make_user("house@example.com"),
                "education": "MD",
            },
        )
    )


@pytest.fixture
def clinic(open_client):
    section = _data(open_client.post("/api/sections", json={"name": "Outpatients"}))
    return _data(
        open_client.post("/api/clinics", json={"name": "Heart", "section_id": section["id"]})
    )


class TestPersonnel:
    def test_specialization_lists_doctor_ids(self, open_client, specialization, doctor):
        shown = _data(open_client.get(f"/api/specializations/{specialization['id']}"))
        assert shown["doctor_ids"] == [doctor["id"]]

    def test_doctor_requires_existing_user(self, open_client, specialization):
        response = open_client.post(
            "/api/doctors",
            json={"specialization_id": specialization["id"], "user_id": 404},
        )
        assert response.status_code == 404

    def test_user_has_one_doctor_profile(self, open_client, specialization, doctor):
        response = open_client.post(
            "/api/doctors",
            json={"specialization_id": specialization["id"], "user_id": doctor["user_id"]},
        )
        assert response.status_code == 409

    def test_staff_defaults_experience(self, open_client, make_user):
        staff = open_client.post(
            "/api/staff", json={"position": "Porter", "user_id": make_user("s@example.com")}
        )

        assert staff.status_code == 201
        assert _data(staff)["experience"] == 0

    def test_negative_nurse_experience(self, open_client, make_user, specialization):
        response = open_client.post(
            "/api/nurses",
            json={
                "specialization_id": specialization["id"],
                "user_id": make_user("n@example.com"),
                "experience": -1,
            },
        )
        assert response.status_code == 400


class TestPatientCare:
    def test_patient_embeds_reservations_and_prescriptions(
        self, open_client, make_user, doctor, clinic
    ):
        patient = _data(
            open_client.post("/api/patients", json={"user_id": make_user("p@example.com")})
        )
        reservation = open_client.post(
            "/api/reservations",
            json={"patient_id": patient["id"], "doctor_id": doctor["id"], "clinic_id": clinic["id"]},
        )
        prescription = open_client.post(
            "/api/prescriptions",
            json={"patient_id": patient["id"], "doctor_id": doctor["id"], "notes": "Rest"},
        )
        assert reservation.status_code == 201
        assert prescription.status_code == 201

        shown = _data(open_client.get(f"/api/patients/{patient['id']}"))

        assert [r["clinic_id"] for r in shown["reservations"]] == [clinic["id"]]
        assert [p["notes"] for p in shown["prescriptions"]] == ["Rest"]
        clinic_view = _data(open_client.get(f"/api/clinics/{clinic['id']}"))
        assert clinic_view["reservation_ids"] == [_data(reservation)["id"]]

    def test_reservation_requires_existing_clinic(self, open_client, make_user, doctor):
        patient = _data(
            open_client.post("/api/patients", json={"user_id": make_user("q@example.com")})
        )
        response = open_client.post(
            "/api/reservations",
            json={"patient_id": patient["id"], "doctor_id": doctor["id"], "clinic_id": 55},
        )

        assert response.status_code == 404
        assert "Clinic 55" in response.get_json()["message"]


class TestSupply:
    def test_supplier_medicines(self, open_client):
        supplier = _data(open_client.post("/api/suppliers", json={"name": "Acme Pharma"}))
        medicine = _data(
            open_client.post(
                "/api/medicines", json={"name": "Aspirin", "supplier_id": supplier["id"]}
            )
        )

        listed = _data(open_client.get(f"/api/suppliers/{supplier['id']}/medicines"))
        shown = _data(open_client.get(f"/api/suppliers/{supplier['id']}"))

        assert [m["name"] for m in listed] == ["Aspirin"]
        assert shown["medicine_ids"] == [medicine["id"]]

    def test_medicine_requires_supplier(self, open_client):
        response = open_client.post("/api/medicines", json={"name": "Aspirin", "supplier_id": 9})
        assert response.status_code == 404
