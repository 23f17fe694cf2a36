from datetime import datetime, timedelta

from django.db.models import Avg, Count, IntegerField, Max, Q, Sum
from django.db.models.functions import Coalesce, TruncDay, TruncMonth, TruncWeek
from django.utils import timezone

from Accounts.models import User
from Content.models import Review
from Pitch.models import Booking, Pitch

TRUNCATORS = {
    "day": TruncDay,
    "week": TruncWeek,
    "month": TruncMonth,
}

TOP_PITCHES = 5


def _windows():
    today = timezone.localdate()
    return today, today - timedelta(days=7), today - timedelta(days=30)


def _revenue(filter_q=None):
    return Coalesce(
        Sum("price_value", filter=filter_q), 0, output_field=IntegerField()
    )


def _round_ratio(part, whole):
    return round(part * 100 / whole, 2) if whole else 0


def _percent_change(current, previous):
    if not previous:
        return 100 if current > 0 else 0
    return round((current - previous) * 100 / previous, 2)


def _bucket_label(bucket, interval):
    if isinstance(bucket, datetime):
        bucket = bucket.date()
    if interval == "month":
        return bucket.strftime("%Y-%m")
    if interval == "week":
        year, week, _ = bucket.isocalendar()
        return f"{year}-W{week:02d}"
    return bucket.isoformat()


class BookingStatsService:
    """
    Booking counters shared by the dashboards.
    Every figure is computed from the booked calendar day, not the creation time.
    """

    @staticmethod
    def get_booking_counts(bookings):
        today, week_start, month_start = _windows()
        return bookings.aggregate(
            total=Count("id"),
            today=Count("id", filter=Q(date=today)),
            thisWeek=Count("id", filter=Q(date__gte=week_start)),
            thisMonth=Count("id", filter=Q(date__gte=month_start)),
            pending=Count("id", filter=Q(status=Booking.PENDING)),
            confirmed=Count("id", filter=Q(status=Booking.CONFIRMED)),
            cancelled=Count("id", filter=Q(status=Booking.CANCELLED)),
        )

    @staticmethod
    def get_revenue_totals(bookings):
        today, _, month_start = _windows()
        return bookings.filter(status=Booking.CONFIRMED).aggregate(
            total=_revenue(),
            today=_revenue(Q(date=today)),
            thisMonth=_revenue(Q(date__gte=month_start)),
        )

    @staticmethod
    def get_top_pitches(bookings, limit=TOP_PITCHES):
        rows = (
            bookings
            .filter(status=Booking.CONFIRMED, pitch__isnull=False)
            .values("pitch_id")
            .annotate(
                name=Max("pitch__name"),
                bookingCount=Count("id"),
                revenue=_revenue(),
            )
            .order_by("-bookingCount", "-revenue")[:limit]
        )
        return [
            {
                "id": str(row["pitch_id"]),
                "name": row["name"],
                "bookingCount": row["bookingCount"],
                "revenue": row["revenue"],
            }
            for row in rows
        ]

    @staticmethod
    def get_user_stats(user):
        bookings = Booking.objects.for_customer(user)
        stats = bookings.aggregate(
            totalBookings=Count("id"),
            confirmedBookings=Count("id", filter=Q(status=Booking.CONFIRMED)),
            pendingBookings=Count("id", filter=Q(status=Booking.PENDING)),
            cancelledBookings=Count("id", filter=Q(status=Booking.CANCELLED)),
            totalSpent=_revenue(Q(status=Booking.CONFIRMED)),
            lastBookingDate=Max("created_at"),
        )
        return stats

    @staticmethod
    def get_owner_booking_stats(owner):
        bookings = Booking.objects.for_owner(owner)
        counts = BookingStatsService.get_booking_counts(bookings)
        return {
            "total": counts["total"],
            "today": counts["today"],
            "pending": counts["pending"],
            "confirmed": counts["confirmed"],
            "cancelled": counts["cancelled"],
            "revenue": BookingStatsService.get_revenue_totals(bookings),
        }


class AdminDashboardService:
    """
    All dashboard-related queries live here.
    Views should NOT touch the database directly.
    """

    @staticmethod
    def get_user_counts():
        return User.objects.aggregate(
            total=Count("id"),
            players=Count("id", filter=Q(role=User.PLAYER)),
            owners=Count("id", filter=Q(role=User.OWNER)),
            admins=Count("id", filter=Q(role=User.ADMIN)),
            active=Count("id", filter=Q(is_active=True)),
            inactive=Count("id", filter=Q(is_active=False)),
        )

    @staticmethod
    def get_pitch_counts(pitches):
        return pitches.aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(status=Pitch.ACTIVE)),
            pending=Count("id", filter=Q(status=Pitch.PENDING)),
            locked=Count("id", filter=Q(status=Pitch.LOCKED)),
        )

    @staticmethod
    def get_average_rating():
        avg = (
            Review.objects
            .filter(status=Review.ACTIVE)
            .aggregate(avg=Avg("rating"))["avg"]
        )
        return round(avg, 1) if avg is not None else 0

    @staticmethod
    def get_stats():
        bookings = Booking.objects.all()
        return {
            "users": AdminDashboardService.get_user_counts(),
            "pitches": AdminDashboardService.get_pitch_counts(Pitch.objects.all()),
            "bookings": BookingStatsService.get_booking_counts(bookings),
            "revenue": BookingStatsService.get_revenue_totals(bookings),
            "topPitches": BookingStatsService.get_top_pitches(bookings),
            "averageRating": AdminDashboardService.get_average_rating(),
        }


class OwnerDashboardService:

    @staticmethod
    def get_stats(owner):
        bookings = Booking.objects.for_owner(owner)
        return {
            "pitches": AdminDashboardService.get_pitch_counts(
                Pitch.objects.filter(owner=owner)
            ),
            "bookings": BookingStatsService.get_booking_counts(bookings),
            "revenue": BookingStatsService.get_revenue_totals(bookings),
            "topPitches": BookingStatsService.get_top_pitches(bookings),
        }


class RevenueService:
    """
    Revenue reports over confirmed bookings.
    `bookings` is already scoped to the caller (all, or one owner's pitches).
    """

    @staticmethod
    def scope(bookings, date_from=None, date_to=None, pitch_id=None):
        if date_from:
            bookings = bookings.filter(date__gte=date_from)
        if date_to:
            bookings = bookings.filter(date__lte=date_to)
        if pitch_id:
            bookings = bookings.filter(pitch_id=pitch_id)
        return bookings

    @staticmethod
    def summary(bookings):
        totals = bookings.aggregate(
            totalRevenue=_revenue(Q(status=Booking.CONFIRMED)),
            ordersConfirmed=Count("id", filter=Q(status=Booking.CONFIRMED)),
            cancelled=Count("id", filter=Q(status=Booking.CANCELLED)),
        )
        orders = totals["ordersConfirmed"]
        cancelled = totals.pop("cancelled")

        totals["cancelRate"] = _round_ratio(cancelled, orders + cancelled)
        totals["aov"] = round(totals["totalRevenue"] / orders) if orders else 0
        return totals

    @staticmethod
    def timeseries(bookings, interval="day"):
        trunc = TRUNCATORS[interval]
        rows = (
            bookings
            .filter(status=Booking.CONFIRMED)
            .annotate(bucket=trunc("date"))
            .values("bucket")
            .annotate(revenue=_revenue(), orders=Count("id"))
            .order_by("bucket")
        )
        return [
            {
                "date": _bucket_label(row["bucket"], interval),
                "revenue": row["revenue"],
                "orders": row["orders"],
            }
            for row in rows
        ]

    @staticmethod
    def by_pitch(bookings, limit=10):
        rows = (
            bookings
            .filter(status__in=[Booking.CONFIRMED, Booking.CANCELLED])
            .values("pitch_id")
            .annotate(
                pitchName=Max("pitch_name"),
                revenue=_revenue(Q(status=Booking.CONFIRMED)),
                orders=Count("id", filter=Q(status=Booking.CONFIRMED)),
                cancelled=Count("id", filter=Q(status=Booking.CANCELLED)),
            )
        )

        report = [
            {
                "pitchId": str(row["pitch_id"]) if row["pitch_id"] else None,
                "pitchName": row["pitchName"],
                "revenue": row["revenue"],
                "orders": row["orders"],
                "aov": round(row["revenue"] / row["orders"]) if row["orders"] else 0,
                "cancelRate": _round_ratio(
                    row["cancelled"], row["orders"] + row["cancelled"]
                ),
            }
            for row in rows
        ]
        report.sort(key=lambda r: r["revenue"], reverse=True)
        return report[:limit]

    @staticmethod
    def by_timeslot(bookings):
        rows = (
            bookings
            .filter(status=Booking.CONFIRMED)
            .values("time_slot")
            .annotate(revenue=_revenue(), orders=Count("id"))
            .order_by("-orders", "time_slot")
        )
        return [
            {
                "timeSlot": row["time_slot"],
                "revenue": row["revenue"],
                "orders": row["orders"],
                "aov": round(row["revenue"] / row["orders"]),
            }
            for row in rows
        ]

    @staticmethod
    def trends(bookings, today=None):
        """
        This week, month and year up to today against the whole previous
        period. Weeks start on Sunday.
        """
        today = today or timezone.localdate()
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        month_start = today.replace(day=1)
        year_start = today.replace(month=1, day=1)
        periods = {
            "week": (week_start, week_start - timedelta(days=7)),
            "month": (month_start, (month_start - timedelta(days=1)).replace(day=1)),
            "year": (year_start, year_start.replace(year=today.year - 1)),
        }

        confirmed = bookings.filter(status=Booking.CONFIRMED)
        report = {}
        for name, (start, previous_start) in periods.items():
            current = Q(date__gte=start, date__lte=today)
            previous = Q(date__gte=previous_start, date__lt=start)
            totals = confirmed.aggregate(
                revenue=_revenue(current),
                orders=Count("id", filter=current),
                previousRevenue=_revenue(previous),
                previousOrders=Count("id", filter=previous),
            )
            report[name] = {
                "revenue": totals["revenue"],
                "revenueChange": _percent_change(totals["revenue"], totals["previousRevenue"]),
                "orders": totals["orders"],
                "ordersChange": _percent_change(totals["orders"], totals["previousOrders"]),
            }
        return report
