"""URL routing for the finance domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import (
    FinancialReportView,
    FinancialSummaryView,
    PaymentMethodBreakdownView,
    PaymentViewSet,
)

router = DefaultRouter()
router.register(r"payments", PaymentViewSet, basename="payment")

urlpatterns = [
    path("summary/", FinancialSummaryView.as_view(), name="finance-summary"),
    path("report/", FinancialReportView.as_view(), name="finance-report"),
    path("payment-methods/", PaymentMethodBreakdownView.as_view(), name="finance-payment-methods"),
    path("", include(router.urls)),
]
