"""API views for the admin dashboard.

Every endpoint here is restricted to administrators. Overviews return the
most recent records; reports accept a creation date window and validate
their query parameters before touching the database.
"""

from __future__ import annotations

from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.serializers import BookingSerializer
from apps.hotels.serializers import HotelShortSerializer
from apps.users.permissions import IsAdminRole
from apps.users.serializers import UserSerializer

from . import services
from .serializers import (
    BookingsReportQuerySerializer,
    HotelsReportQuerySerializer,
    RevenueReportQuerySerializer,
    UsersReportQuerySerializer,
)


class AdminAPIView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    def validated_query(self, serializer_class) -> dict:  # type: ignore
        serializer = serializer_class(data=self.request.query_params)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class DashboardStatsView(AdminAPIView):
    """Headline counters plus the latest bookings."""

    def get(self, request, format=None):  # type: ignore
        data = services.dashboard_stats()
        data["recent_bookings"] = BookingSerializer(data["recent_bookings"], many=True).data
        return Response(data)


class HotelsOverviewView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        return Response({"hotels": HotelShortSerializer(services.recent_hotels(), many=True).data})


class BookingsOverviewView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        return Response({"bookings": BookingSerializer(services.recent_bookings(), many=True).data})


class UsersOverviewView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        return Response({"users": UserSerializer(services.recent_users(), many=True).data})


class BookingStatsView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        return Response({"stats": services.booking_status_stats()})


class BookingsReportView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        query = self.validated_query(BookingsReportQuerySerializer)
        bookings = services.bookings_report(
            query.get("start_date"),
            query.get("end_date"),
            status=query.get("status"),
            hotel=query.get("hotel"),
        )
        data = BookingSerializer(bookings, many=True).data
        return Response({"bookings": data, "count": len(data)})


class HotelsReportView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        query = self.validated_query(HotelsReportQuerySerializer)
        data = HotelShortSerializer(services.hotels_report(query["limit"]), many=True).data
        return Response({"hotels": data, "count": len(data)})


class UsersReportView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        query = self.validated_query(UsersReportQuerySerializer)
        users = services.users_report(query.get("start_date"), query.get("end_date"), role=query.get("role"))
        data = UserSerializer(users, many=True).data
        return Response({"users": data, "count": len(data)})


class RevenueReportView(AdminAPIView):
    def get(self, request, format=None):  # type: ignore
        query = self.validated_query(RevenueReportQuerySerializer)
        report = services.revenue_report(query.get("start_date"), query.get("end_date"), group_by=query["group_by"])
        return Response(report)
