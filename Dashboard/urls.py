# Dashboard/urls.py
from django.urls import path
from .views import (
    AdminDashboardView,
    OwnerDashboardView,
    OwnerRevenueByPitchView,
    OwnerRevenueByTimeslotView,
    OwnerRevenueSummaryView,
    OwnerRevenueTimeseriesView,
    OwnerRevenueTrendsView,
    RevenueByPitchView,
    RevenueByTimeslotView,
    RevenueSummaryView,
    RevenueTimeseriesView,
)

urlpatterns = [
    path("admin/dashboard/stats", AdminDashboardView.as_view(), name="admin-dashboard"),
    path("admin/revenue/summary", RevenueSummaryView.as_view(), name="admin-revenue-summary"),
    path("admin/revenue/timeseries", RevenueTimeseriesView.as_view(), name="admin-revenue-timeseries"),
    path("admin/revenue/by-pitch", RevenueByPitchView.as_view(), name="admin-revenue-by-pitch"),
    path("admin/revenue/by-timeslot", RevenueByTimeslotView.as_view(), name="admin-revenue-by-timeslot"),

    path("owner/dashboard/stats", OwnerDashboardView.as_view(), name="owner-dashboard"),
    path("owner/revenue/summary", OwnerRevenueSummaryView.as_view(), name="owner-revenue-summary"),
    path("owner/revenue/timeseries", OwnerRevenueTimeseriesView.as_view(), name="owner-revenue-timeseries"),
    path("owner/revenue/by-pitch", OwnerRevenueByPitchView.as_view(), name="owner-revenue-by-pitch"),
    path("owner/revenue/by-timeslot", OwnerRevenueByTimeslotView.as_view(), name="owner-revenue-by-timeslot"),
    path("owner/revenue/trends", OwnerRevenueTrendsView.as_view(), name="owner-revenue-trends"),
]
