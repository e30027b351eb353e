from datetime import date, timedelta

from clinic.core.config import settings

BOOKING = {
    "patient_id": "9",
    "physiotherapist_id": "3",
    "date": "2025-03-10",
    "time_slot": "9:00 AM - 10:30 AM",
}


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_login_requires_matching_role(client):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "physio1@clinic.com", "password": "physio123", "role": "admin"},
    )
    assert response.status_code == 401

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "physio1@clinic.com", "password": "wrong", "role": "physiotherapist"},
    )
    assert response.status_code == 401


async def test_me(client, physio_headers):
    response = await client.get("/api/v1/auth/me", headers=physio_headers)
    assert response.status_code == 200
    assert response.json() == {
        "id": "3",
        "name": "Dr. Mike Johnson",
        "email": "physio2@clinic.com",
        "role": "physiotherapist",
    }


async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/v1/appointments")
    assert response.status_code == 401


async def test_bookable_dates(client, reception_headers):
    response = await client.get("/api/v1/slots/dates", headers=reception_headers)
    assert response.status_code == 200
    dates = response.json()
    assert dates[0]["value"] in {date.today().isoformat(), (date.today() + timedelta(days=1)).isoformat()}
    assert all(d["weekday"] != "Sunday" for d in dates)
    assert len(dates) in (25, 26)


async def test_slot_endpoints_are_for_staff(client, patient_headers):
    response = await client.get("/api/v1/slots/dates", headers=patient_headers)
    assert response.status_code == 403
    response = await client.get("/api/v1/slots/template", headers=patient_headers)
    assert response.status_code == 200
    assert response.json()[0] == {"id": "Monday-0", "day": "Monday", "time": "7:00 AM - 8:30 AM"}


async def test_booking_flow(client, reception_headers, physio_headers):
    response = await client.post("/api/v1/appointments", json=BOOKING, headers=reception_headers)
    assert response.status_code == 201, response.text
    body = response.json()
    appointment_id = body["appointment"]["id"]
    assert body["appointment"]["status"] == "pending"
    assert body["appointment"]["appointment_date"] == "2025-03-10"
    assert [n["user_id"] for n in body["notifications"]] == ["3"]

    response = await client.get(
        "/api/v1/slots/available", params={"date": "2025-03-10"}, headers=reception_headers
    )
    assert response.status_code == 200
    slots = {s["time_slot"]: s["available"] for s in response.json()["slots"]}
    assert response.json()["weekday"] == "Monday"
    assert slots["9:00 AM - 10:30 AM"] is False
    assert slots["7:00 AM - 8:30 AM"] is True

    response = await client.post("/api/v1/appointments", json=BOOKING, headers=reception_headers)
    assert response.status_code == 409

    response = await client.get("/api/v1/notifications", headers=physio_headers)
    assert [n["type"] for n in response.json()] == ["appointment_requested"]

    response = await client.post(f"/api/v1/appointments/{appointment_id}/approve", headers=physio_headers)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["appointment"]["status"] == "approved"
    assert body["appointment"]["approved_at"]
    assert [n["user_id"] for n in body["notifications"]] == ["9", settings.reception_inbox_id]

    response = await client.get("/api/v1/notifications", headers=reception_headers)
    messages = [n["message"] for n in response.json()]
    assert messages == ["Dr. Mike Johnson approved appointment for patient on 2025-03-10 at 9:00 AM - 10:30 AM."]

    response = await client.post(f"/api/v1/appointments/{appointment_id}/approve", headers=physio_headers)
    assert response.status_code == 409


async def test_booking_is_receptionist_only(client, physio_headers):
    response = await client.post("/api/v1/appointments", json=BOOKING, headers=physio_headers)
    assert response.status_code == 403


async def test_booking_unknown_patient_and_bad_slot(client, reception_headers):
    response = await client.post(
        "/api/v1/appointments", json={**BOOKING, "patient_id": "404"}, headers=reception_headers
    )
    assert response.status_code == 404
    response = await client.post(
        "/api/v1/appointments", json={**BOOKING, "date": "2025-03-16"}, headers=reception_headers
    )
    assert response.status_code == 422


async def test_other_physiotherapist_cannot_approve(client, reception_headers, other_physio_headers):
    response = await client.post("/api/v1/appointments", json=BOOKING, headers=reception_headers)
    appointment_id = response.json()["appointment"]["id"]
    response = await client.post(f"/api/v1/appointments/{appointment_id}/approve", headers=other_physio_headers)
    assert response.status_code == 403


async def test_decline_frees_the_slot(client, reception_headers, physio_headers):
    response = await client.post("/api/v1/appointments", json=BOOKING, headers=reception_headers)
    appointment_id = response.json()["appointment"]["id"]

    response = await client.post(f"/api/v1/appointments/{appointment_id}/decline", headers=physio_headers)
    assert response.status_code == 200
    assert response.json()["appointment"]["status"] == "declined"

    response = await client.post("/api/v1/appointments", json=BOOKING, headers=reception_headers)
    assert response.status_code == 201


async def test_appointment_visibility_by_role(client, reception_headers, patient_headers, physio_headers):
    await client.post("/api/v1/appointments", json=BOOKING, headers=reception_headers)

    staff = await client.get("/api/v1/appointments", headers=reception_headers)
    assert len(staff.json()) == 2
    mine = await client.get("/api/v1/appointments", headers=patient_headers)
    assert [a["patient_id"] for a in mine.json()] == ["1"]
    physio = await client.get("/api/v1/appointments", headers=physio_headers)
    assert [a["physiotherapist_id"] for a in physio.json()] == ["3"]
    pending = await client.get("/api/v1/appointments", params={"status": "pending"}, headers=reception_headers)
    assert len(pending.json()) == 1


async def test_overview_names(client, admin_headers):
    response = await client.get("/api/v1/appointments/overview", headers=admin_headers)
    assert response.status_code == 200
    row = response.json()[0]
    assert row["patient_name"] == "John Patient"
    assert row["physiotherapist_name"] == "Dr. Sarah Wilson"


async def test_physiotherapist_replaces_patient_record(client, physio_headers):
    record = (await client.get("/api/v1/patients/9", headers=physio_headers)).json()
    payload = {
        key: record[key]
        for key in (
            "name", "sex", "date_of_birth", "phone_number", "complaint",
            "home_program", "comments", "assigned_physiotherapist_id",
        )
    }
    payload["home_program"] = "Wall slides, 3 x 10"
    response = await client.put("/api/v1/patients/9", json=payload, headers=physio_headers)
    assert response.status_code == 200
    assert response.json()["home_program"] == "Wall slides, 3 x 10"
    assert response.json()["assigned_physiotherapist_name"] == "Dr. Mike Johnson"

    response = await client.put("/api/v1/patients/404", json=payload, headers=physio_headers)
    assert response.status_code == 404

    # A partial body is not a complete record
    response = await client.put("/api/v1/patients/9", json={"home_program": "x"}, headers=physio_headers)
    assert response.status_code == 422


async def test_patient_sees_only_own_record(client, patient_headers):
    assert (await client.get("/api/v1/patients/1", headers=patient_headers)).status_code == 200
    assert (await client.get("/api/v1/patients/9", headers=patient_headers)).status_code == 403
    assert (await client.get("/api/v1/patients", headers=patient_headers)).status_code == 403


async def test_patient_appointment_request_reaches_reception(client, patient_headers, reception_headers):
    response = await client.post("/api/v1/patients/me/appointment-requests", headers=patient_headers)
    assert response.status_code == 202
    notification_id = response.json()["id"]

    inbox = (await client.get("/api/v1/notifications", params={"unread_only": True}, headers=reception_headers)).json()
    assert [n["id"] for n in inbox] == [notification_id]

    response = await client.post(f"/api/v1/notifications/{notification_id}/read", headers=reception_headers)
    assert response.json()["read"] is True
    inbox = (await client.get("/api/v1/notifications", params={"unread_only": True}, headers=reception_headers)).json()
    assert inbox == []

    # Not addressed to the patient
    response = await client.post(f"/api/v1/notifications/{notification_id}/read", headers=patient_headers)
    assert response.status_code == 404


async def test_admin_manages_physiotherapists(client, admin_headers, reception_headers):
    new = {"name": "Dr. Ana Lopez", "email": "ana@clinic.com", "specialization": "Vestibular", "password": "vestibular1"}
    response = await client.post("/api/v1/physiotherapists", json=new, headers=reception_headers)
    assert response.status_code == 403

    response = await client.post("/api/v1/physiotherapists", json=new, headers=admin_headers)
    assert response.status_code == 201
    physio_id = response.json()["id"]
    assert (await client.post("/api/v1/physiotherapists", json=new, headers=admin_headers)).status_code == 409

    listed = (await client.get("/api/v1/physiotherapists", headers=reception_headers)).json()
    assert len(listed) == 6

    response = await client.delete(f"/api/v1/physiotherapists/{physio_id}", headers=admin_headers)
    assert response.status_code == 204
    response = await client.delete(f"/api/v1/physiotherapists/{physio_id}", headers=admin_headers)
    assert response.status_code == 404


async def test_added_physiotherapist_can_approve_their_bookings(client, admin_headers, reception_headers):
    new = {"name": "Dr. Ana Lopez", "email": "ana@clinic.com", "password": "vestibular1"}
    response = await client.post("/api/v1/physiotherapists", json=new, headers=admin_headers)
    assert response.status_code == 201
    assert "password" not in response.json()
    physio_id = response.json()["id"]

    response = await client.post(
        "/api/v1/appointments",
        json={**BOOKING, "physiotherapist_id": physio_id},
        headers=reception_headers,
    )
    assert response.status_code == 201
    appointment_id = response.json()["appointment"]["id"]

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "ana@clinic.com", "password": "vestibular1", "role": "physiotherapist"},
    )
    assert response.status_code == 200
    ana = {"Authorization": f"Bearer {response.json()['access_token']}"}

    inbox = (await client.get("/api/v1/notifications", headers=ana)).json()
    assert [n["type"] for n in inbox] == ["appointment_requested"]

    response = await client.post(f"/api/v1/appointments/{appointment_id}/approve", headers=ana)
    assert response.status_code == 200
    assert response.json()["appointment"]["status"] == "approved"
