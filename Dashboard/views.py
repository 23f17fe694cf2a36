from rest_framework.response import Response
from rest_framework.views import APIView

from Accounts.permissions import IsAdminRole, IsOwnerRole
from Pitch.models import Booking
from .serializers import RevenueQuerySerializer
from .services import AdminDashboardService, OwnerDashboardService, RevenueService


# -------------------------------------------------------------------
# DASHBOARD STATS
# -------------------------------------------------------------------
class AdminDashboardView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        return Response(
            {"success": True, "data": AdminDashboardService.get_stats()},
            status=200
        )


class OwnerDashboardView(APIView):
    permission_classes = [IsOwnerRole]

    def get(self, request):
        return Response(
            {"success": True, "data": OwnerDashboardService.get_stats(request.user)},
            status=200
        )


# -------------------------------------------------------------------
# REVENUE REPORTS
# -------------------------------------------------------------------
class RevenueReportView(APIView):
    """
    Admin API
    Base for the revenue reports; admins see every booking
    """
    permission_classes = [IsAdminRole]

    def get_bookings(self):
        return Booking.objects.all()

    def get_report(self, bookings, params):
        raise NotImplementedError

    def get(self, request):
        query = RevenueQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        bookings = RevenueService.scope(
            self.get_bookings(),
            date_from=params.get("dateFrom"),
            date_to=params.get("dateTo"),
            pitch_id=params.get("pitchId"),
        )
        return Response({"success": True, "data": self.get_report(bookings, params)})


class OwnerScopeMixin:
    permission_classes = [IsOwnerRole]

    def get_bookings(self):
        return Booking.objects.for_owner(self.request.user)


class RevenueSummaryView(RevenueReportView):
    def get_report(self, bookings, params):
        return RevenueService.summary(bookings)


class RevenueTimeseriesView(RevenueReportView):
    def get_report(self, bookings, params):
        return RevenueService.timeseries(bookings, params["interval"])


class RevenueByPitchView(RevenueReportView):
    def get_report(self, bookings, params):
        return RevenueService.by_pitch(bookings, params["limit"])


class RevenueByTimeslotView(RevenueReportView):
    def get_report(self, bookings, params):
        return RevenueService.by_timeslot(bookings)


class OwnerRevenueSummaryView(OwnerScopeMixin, RevenueSummaryView):
    pass


class OwnerRevenueTimeseriesView(OwnerScopeMixin, RevenueTimeseriesView):
    pass


class OwnerRevenueByPitchView(OwnerScopeMixin, RevenueByPitchView):
    pass


class OwnerRevenueByTimeslotView(OwnerScopeMixin, RevenueByTimeslotView):
    pass


class OwnerRevenueTrendsView(APIView):
    permission_classes = [IsOwnerRole]

    def get(self, request):
        bookings = Booking.objects.for_owner(request.user)
        return Response({"success": True, "data": RevenueService.trends(bookings)})
