"""URL routing for the admin dashboard and reports."""

from django.urls import path  # type: ignore

from . import views


urlpatterns = [
    # Mounted under api/v1/admin/ in config.urls
    path('dashboard/stats/', views.DashboardStatsView.as_view(), name='admin-dashboard-stats'),
    path('hotels/overview/', views.HotelsOverviewView.as_view(), name='admin-hotels-overview'),
    path('bookings/overview/', views.BookingsOverviewView.as_view(), name='admin-bookings-overview'),
    path('users/overview/', views.UsersOverviewView.as_view(), name='admin-users-overview'),
    path('bookings/stats/', views.BookingStatsView.as_view(), name='admin-bookings-stats'),
    path('reports/bookings/', views.BookingsReportView.as_view(), name='admin-report-bookings'),
    path('reports/hotels/', views.HotelsReportView.as_view(), name='admin-report-hotels'),
    path('reports/users/', views.UsersReportView.as_view(), name='admin-report-users'),
    path('reports/revenue/', views.RevenueReportView.as_view(), name='admin-report-revenue'),
]
