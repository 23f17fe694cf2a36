import pytest

from Pitch.models import Booking

SLOT = "18:30 - 20:00"


def booking_payload(pitch, **overrides):
    payload = {
        "fieldId": str(pitch.pk),
        "fieldName": "ignored",
        "date": "2025-06-01",
        "dateISO": "2025-05-31T17:00:00.000Z",
        "timeSlot": SLOT,
        "name": "Nguyễn Văn A",
        "phone": "0912345678",
        "price": "1đ",
    }
    payload.update(overrides)
    return payload


def availability(client, pitch, day="2025-06-01"):
    response = client.get(f"/api/pitches/{pitch.pk}/available", {"date": day})
    assert response.status_code == 200
    return response.json()["data"]


def test_book_conflict_confirm_scenario(api_client, auth_client, pitch, owner):
    created = api_client.post("/api/bookings", booking_payload(pitch), format="json")

    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    booking = body["data"]
    assert booking["status"] == "pending"
    assert booking["date"] == "01/06/2025"
    assert booking["dateISO"] == "2025-06-01T00:00:00.000Z"
    assert booking["price"] == "300.000đ"
    assert booking["fieldName"] == pitch.name
    assert booking["fieldId"] == str(pitch.pk)

    conflict = api_client.post(
        "/api/bookings",
        booking_payload(pitch, name="Trần Thị B", phone="0987654321"),
        format="json",
    )
    assert conflict.status_code == 409
    assert conflict.json() == {
        "success": False,
        "message": "This slot is already booked, choose another",
    }

    confirmed = auth_client(owner).put(
        f"/api/owner/bookings/{booking['id']}/status", {"status": "confirmed"}, format="json"
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["data"]["status"] == "confirmed"
    assert confirmed.json()["data"]["confirmedAt"] is not None

    data = availability(api_client, pitch)
    assert SLOT in data["bookedSlots"]
    assert SLOT not in data["availableSlots"]


def test_mock_payment_scenario(api_client, pitch):
    booking_id = api_client.post(
        "/api/bookings", booking_payload(pitch), format="json"
    ).json()["data"]["id"]

    paid = api_client.post(
        "/api/payments/mock", {"bookingId": booking_id, "paymentMethod": "card"}, format="json"
    )
    assert paid.status_code == 200
    data = paid.json()["data"]
    assert data["booking"]["status"] == "confirmed"
    assert data["booking"]["paymentMethod"] == "card"
    assert data["payment"]["transactionId"].startswith("TXN")
    assert data["payment"]["amount"] == "300.000đ"

    again = api_client.post(
        "/api/payments/mock", {"bookingId": booking_id, "paymentMethod": "card"}, format="json"
    )
    assert again.status_code == 400
    assert again.json()["message"] == "This booking can no longer be changed"


def test_payment_method_defaults_to_card(api_client, pitch):
    booking_id = api_client.post(
        "/api/bookings", booking_payload(pitch), format="json"
    ).json()["data"]["id"]

    paid = api_client.post("/api/payments/mock", {"bookingId": booking_id}, format="json")
    assert paid.json()["data"]["payment"]["paymentMethod"] == "card"


def test_dateiso_alone_is_accepted(api_client, pitch):
    payload = booking_payload(pitch, dateISO="2025-06-01T00:00:00.000Z")
    payload.pop("date")

    response = api_client.post("/api/bookings", payload, format="json")
    assert response.status_code == 201
    assert response.json()["data"]["date"] == "01/06/2025"


def test_booking_validation_errors(api_client, pitch):
    response = api_client.post(
        "/api/bookings", booking_payload(pitch, phone="123"), format="json"
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "phone" in body["errors"]


def test_booking_missing_date(api_client, pitch):
    payload = booking_payload(pitch)
    payload.pop("date")
    payload.pop("dateISO")

    response = api_client.post("/api/bookings", payload, format="json")
    assert response.status_code == 400
    assert "date" in response.json()["errors"]


@pytest.mark.django_db
def test_booking_unknown_pitch(api_client):
    response = api_client.post(
        "/api/bookings",
        {"fieldId": "999", "date": "2025-06-01", "timeSlot": SLOT, "name": "A", "phone": "0912345678"},
        format="json",
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Pitch not found"


def test_availability_requires_date(api_client, pitch):
    response = api_client.get(f"/api/pitches/{pitch.pk}/available")
    assert response.status_code == 400


@pytest.mark.django_db
@pytest.mark.parametrize("pk", ["nope", "999", "²"])
def test_availability_unknown_pitch(api_client, pk):
    response = api_client.get(f"/api/pitches/{pk}/available", {"date": "2025-06-01"})
    assert response.status_code == 404
    assert response.json()["message"] == "Pitch not found"


def test_logged_in_customer_is_attached(auth_client, pitch, player):
    client = auth_client(player)
    client.post("/api/bookings", booking_payload(pitch), format="json")

    mine = client.get("/api/bookings/me")
    assert mine.status_code == 200
    body = mine.json()
    assert body["pagination"]["total"] == 1
    assert body["data"][0]["userId"] == str(player.pk)


def test_my_bookings_requires_login(api_client):
    response = api_client.get("/api/bookings/me")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_customer_cancel_endpoint(auth_client, pitch, player):
    client = auth_client(player)
    booking_id = client.post(
        "/api/bookings", booking_payload(pitch), format="json"
    ).json()["data"]["id"]

    first = client.post(f"/api/bookings/{booking_id}/cancel")
    assert first.status_code == 200
    assert first.json()["data"]["status"] == "cancelled"

    second = client.post(f"/api/bookings/{booking_id}/cancel")
    assert second.status_code == 400

    assert SLOT in availability(client, pitch)["availableSlots"]


# -------------------------------------------------------------------
# ADMIN / OWNER BOOKING MANAGEMENT
# -------------------------------------------------------------------
def make_bookings(api_client, pitch, slots):
    return [
        api_client.post(
            "/api/bookings", booking_payload(pitch, timeSlot=slot), format="json"
        ).json()["data"]["id"]
        for slot in slots
    ]


def test_admin_bulk_status_partial_failure(api_client, auth_client, pitch, admin_user):
    [booking_id] = make_bookings(api_client, pitch, [SLOT])

    response = auth_client(admin_user).post(
        "/api/admin/bookings/bulk-status",
        {"bookingIds": [booking_id, "unknown", "²"], "status": "confirmed"},
        format="json",
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["updated"] == 1
    assert data["failed"] == 2
    assert [r["success"] for r in data["results"]] == [True, False, False]
    assert data["results"][2]["message"] == "Booking not found"
    assert Booking.objects.get(pk=booking_id).status == Booking.CONFIRMED


def test_admin_booking_filters(api_client, auth_client, pitch, other_pitch, admin_user):
    make_bookings(api_client, pitch, [SLOT, "20:00 - 21:30"])
    make_bookings(api_client, other_pitch, [SLOT])
    client = auth_client(admin_user)

    assert client.get("/api/admin/bookings").json()["pagination"]["total"] == 3
    assert client.get("/api/admin/bookings", {"pitchId": pitch.pk}).json()["pagination"]["total"] == 2
    assert client.get("/api/admin/bookings", {"pitchId": "x"}).json()["pagination"]["total"] == 0
    assert client.get("/api/admin/bookings", {"status": "confirmed"}).json()["pagination"]["total"] == 0
    assert client.get("/api/admin/bookings", {"q": "Sân 7"}).json()["pagination"]["total"] == 1
    assert client.get(
        "/api/admin/bookings", {"dateFrom": "2025-06-02"}
    ).json()["pagination"]["total"] == 0


def test_admin_deletes_booking(api_client, auth_client, pitch, admin_user):
    [booking_id] = make_bookings(api_client, pitch, [SLOT])

    response = auth_client(admin_user).delete(f"/api/admin/bookings/{booking_id}")
    assert response.status_code == 200
    assert response.json()["message"] == "Booking deleted successfully"
    assert not Booking.objects.exists()


def test_owner_sees_only_own_bookings(api_client, auth_client, pitch, other_pitch, other_owner):
    [mine] = make_bookings(api_client, other_pitch, [SLOT])
    [theirs] = make_bookings(api_client, pitch, [SLOT])
    client = auth_client(other_owner)

    listing = client.get("/api/owner/bookings").json()
    assert [b["id"] for b in listing["data"]] == [mine]

    assert client.get(f"/api/owner/bookings/{theirs}").status_code == 404
    response = client.put(
        f"/api/owner/bookings/{theirs}/status", {"status": "confirmed"}, format="json"
    )
    assert response.status_code == 404
    assert Booking.objects.get(pk=theirs).status == Booking.PENDING


def test_owner_booking_stats(api_client, auth_client, pitch, owner):
    ids = make_bookings(api_client, pitch, [SLOT, "20:00 - 21:30"])
    client = auth_client(owner)
    client.put(f"/api/owner/bookings/{ids[0]}/status", {"status": "confirmed"}, format="json")

    data = client.get("/api/owner/bookings/stats").json()["data"]
    assert data["total"] == 2
    assert data["pending"] == 1
    assert data["confirmed"] == 1
    assert data["revenue"]["total"] == 300000


def test_player_cannot_reach_management_endpoints(auth_client, player):
    client = auth_client(player)
    assert client.get("/api/admin/bookings").status_code == 403
    assert client.get("/api/owner/bookings").status_code == 403
