from datetime import date, timedelta

import pytest
from django.utils import timezone

from Content.models import Review
from Dashboard.services import RevenueService
from Pitch import service
from Pitch.models import Booking

SLOT_A = "18:30 - 20:00"
SLOT_B = "20:00 - 21:30"


def booking(pitch, day, slot, status, actor):
    created = service.create_booking(pitch.pk, day, slot, "Khách", "0912345678")
    if status != Booking.PENDING:
        service.change_booking_status(created.pk, status, actor)
    return created


@pytest.fixture
def june_bookings(pitch, other_pitch, admin_user):
    booking(pitch, date(2025, 6, 1), SLOT_A, Booking.CONFIRMED, admin_user)
    booking(pitch, date(2025, 6, 1), SLOT_B, Booking.CANCELLED, admin_user)
    booking(pitch, date(2025, 6, 2), SLOT_A, Booking.CONFIRMED, admin_user)
    booking(other_pitch, date(2025, 6, 1), SLOT_A, Booking.CONFIRMED, admin_user)
    # Pending bookings never count as revenue
    booking(other_pitch, date(2025, 6, 3), SLOT_B, Booking.PENDING, admin_user)


# -------------------------------------------------------------------
# REVENUE SERVICE
# -------------------------------------------------------------------
def test_summary(june_bookings):
    assert RevenueService.summary(Booking.objects.all()) == {
        "totalRevenue": 1100000,
        "ordersConfirmed": 3,
        "cancelRate": 25.0,
        "aov": 366667,
    }


@pytest.mark.django_db
def test_summary_without_bookings():
    assert RevenueService.summary(Booking.objects.all()) == {
        "totalRevenue": 0,
        "ordersConfirmed": 0,
        "cancelRate": 0,
        "aov": 0,
    }


def test_timeseries_by_day_and_month(june_bookings):
    bookings = Booking.objects.all()

    assert RevenueService.timeseries(bookings, "day") == [
        {"date": "2025-06-01", "revenue": 800000, "orders": 2},
        {"date": "2025-06-02", "revenue": 300000, "orders": 1},
    ]
    assert RevenueService.timeseries(bookings, "month") == [
        {"date": "2025-06", "revenue": 1100000, "orders": 3},
    ]


def test_timeseries_by_week(june_bookings):
    # 2025-06-01 is a Sunday, 2025-06-02 starts the next ISO week
    rows = RevenueService.timeseries(Booking.objects.all(), "week")
    assert [r["date"] for r in rows] == ["2025-W22", "2025-W23"]


def test_by_pitch(june_bookings, pitch, other_pitch):
    rows = RevenueService.by_pitch(Booking.objects.all())

    assert rows == [
        {
            "pitchId": str(pitch.pk),
            "pitchName": pitch.name,
            "revenue": 600000,
            "orders": 2,
            "aov": 300000,
            "cancelRate": 33.33,
        },
        {
            "pitchId": str(other_pitch.pk),
            "pitchName": other_pitch.name,
            "revenue": 500000,
            "orders": 1,
            "aov": 500000,
            "cancelRate": 0,
        },
    ]
    assert len(RevenueService.by_pitch(Booking.objects.all(), limit=1)) == 1


def test_by_timeslot(june_bookings):
    assert RevenueService.by_timeslot(Booking.objects.all()) == [
        {"timeSlot": SLOT_A, "revenue": 1100000, "orders": 3, "aov": 366667},
    ]


def test_scope(june_bookings, pitch):
    scoped = RevenueService.scope(
        Booking.objects.all(), date_from=date(2025, 6, 2), pitch_id=pitch.pk
    )
    assert RevenueService.summary(scoped)["totalRevenue"] == 300000


# -------------------------------------------------------------------
# REVENUE ENDPOINTS
# -------------------------------------------------------------------
def test_admin_revenue_endpoints(june_bookings, auth_client, admin_user, pitch):
    client = auth_client(admin_user)

    summary = client.get("/api/admin/revenue/summary").json()
    assert summary["success"] is True
    assert summary["data"]["totalRevenue"] == 1100000

    filtered = client.get(
        "/api/admin/revenue/summary", {"pitchId": pitch.pk, "dateTo": "2025-06-01"}
    ).json()["data"]
    assert filtered["totalRevenue"] == 300000

    series = client.get("/api/admin/revenue/timeseries", {"interval": "month"}).json()["data"]
    assert series == [{"date": "2025-06", "revenue": 1100000, "orders": 3}]

    by_pitch = client.get("/api/admin/revenue/by-pitch", {"limit": 1}).json()["data"]
    assert [r["pitchId"] for r in by_pitch] == [str(pitch.pk)]

    by_slot = client.get("/api/admin/revenue/by-timeslot").json()["data"]
    assert by_slot[0]["timeSlot"] == SLOT_A


def test_owner_revenue_is_scoped(june_bookings, auth_client, owner):
    client = auth_client(owner)

    summary = client.get("/api/owner/revenue/summary").json()["data"]
    assert summary == {
        "totalRevenue": 600000,
        "ordersConfirmed": 2,
        "cancelRate": 33.33,
        "aov": 300000,
    }

    rows = client.get("/api/owner/revenue/by-timeslot").json()["data"]
    assert rows == [{"timeSlot": SLOT_A, "revenue": 600000, "orders": 2, "aov": 300000}]


def test_trends_against_previous_period(pitch, other_pitch, admin_user):
    booking(pitch, date(2025, 6, 1), SLOT_A, Booking.CONFIRMED, admin_user)
    booking(pitch, date(2025, 6, 2), SLOT_A, Booking.CONFIRMED, admin_user)
    booking(pitch, date(2025, 6, 3), SLOT_B, Booking.PENDING, admin_user)
    booking(pitch, date(2025, 5, 28), SLOT_A, Booking.CONFIRMED, admin_user)
    booking(other_pitch, date(2025, 5, 31), SLOT_A, Booking.CONFIRMED, admin_user)
    # After "today", never counted
    booking(other_pitch, date(2025, 6, 10), SLOT_A, Booking.CONFIRMED, admin_user)

    # 2025-06-04 is a Wednesday, so the week started on Sunday 2025-06-01
    trends = RevenueService.trends(Booking.objects.all(), today=date(2025, 6, 4))

    assert trends["week"] == {
        "revenue": 600000,
        "revenueChange": -25.0,
        "orders": 2,
        "ordersChange": 0,
    }
    assert trends["month"] == trends["week"]
    assert trends["year"] == {
        "revenue": 1400000,
        "revenueChange": 100,
        "orders": 4,
        "ordersChange": 100,
    }


@pytest.mark.django_db
def test_trends_without_bookings():
    trends = RevenueService.trends(Booking.objects.all(), today=date(2025, 1, 1))
    assert trends["year"] == {"revenue": 0, "revenueChange": 0, "orders": 0, "ordersChange": 0}


def test_owner_revenue_trends(auth_client, admin_user, owner, player, pitch, other_pitch):
    today = timezone.localdate()
    booking(pitch, today, SLOT_A, Booking.CONFIRMED, admin_user)
    booking(other_pitch, today, SLOT_A, Booking.CONFIRMED, admin_user)

    data = auth_client(owner).get("/api/owner/revenue/trends").json()["data"]
    for period in ("week", "month", "year"):
        assert data[period]["revenue"] == 300000
        assert data[period]["orders"] == 1

    assert auth_client(player).get("/api/owner/revenue/trends").status_code == 403


@pytest.mark.parametrize("params", [
    {"pitchId": "abc"},
    {"interval": "year"},
    {"dateFrom": "2025-06-10", "dateTo": "2025-06-01"},
    {"limit": 0},
])
def test_revenue_query_validation(auth_client, admin_user, params):
    response = auth_client(admin_user).get("/api/admin/revenue/summary", params)
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_revenue_permissions(auth_client, owner, player):
    assert auth_client(owner).get("/api/admin/revenue/summary").status_code == 403
    assert auth_client(player).get("/api/owner/revenue/summary").status_code == 403


# -------------------------------------------------------------------
# DASHBOARD STATS
# -------------------------------------------------------------------
def test_admin_dashboard_stats(auth_client, admin_user, owner, player, pitch, other_pitch):
    today = timezone.localdate()
    booking(pitch, today, SLOT_A, Booking.CONFIRMED, admin_user)
    booking(pitch, today, SLOT_B, Booking.PENDING, admin_user)
    booking(other_pitch, today - timedelta(days=3), SLOT_A, Booking.CONFIRMED, admin_user)
    booking(other_pitch, today - timedelta(days=60), SLOT_A, Booking.CANCELLED, admin_user)

    Review.objects.create(name="A", rating=5, comment="ok")
    Review.objects.create(name="B", rating=4, comment="ok")
    Review.objects.create(name="C", rating=1, comment="hidden", status=Review.INACTIVE)

    data = auth_client(admin_user).get("/api/admin/dashboard/stats").json()["data"]

    assert data["users"]["total"] == 4
    assert data["users"]["owners"] == 2
    assert data["pitches"]["active"] == 2
    assert data["bookings"] == {
        "total": 4,
        "today": 2,
        "thisWeek": 3,
        "thisMonth": 3,
        "pending": 1,
        "confirmed": 2,
        "cancelled": 1,
    }
    assert data["revenue"] == {"total": 800000, "today": 300000, "thisMonth": 800000}
    assert data["averageRating"] == 4.5
    assert [p["id"] for p in data["topPitches"]] == [str(other_pitch.pk), str(pitch.pk)]


def test_owner_dashboard_stats(auth_client, admin_user, owner, pitch, other_pitch):
    today = timezone.localdate()
    booking(pitch, today, SLOT_A, Booking.CONFIRMED, admin_user)
    booking(other_pitch, today, SLOT_A, Booking.CONFIRMED, admin_user)

    data = auth_client(owner).get("/api/owner/dashboard/stats").json()["data"]

    assert data["pitches"]["total"] == 1
    assert data["bookings"]["total"] == 1
    assert data["revenue"]["total"] == 300000
    assert data["topPitches"] == [
        {"id": str(pitch.pk), "name": pitch.name, "bookingCount": 1, "revenue": 300000},
    ]
