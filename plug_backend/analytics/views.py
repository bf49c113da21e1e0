# analytics/views.py

"""
PATH: analytics/views.py

ADMIN DASHBOARD API

GET /api/analytics/dashboard/?range=today|week|month|6months|year|all
(default: today)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from analytics.services.dashboard import build_dashboard
from backend.responses import error_response
from analytics.services.ranges import RANGE_FILTERS, RANGE_TODAY, UnknownRangeError
from users.permissions import IsAdmin


class DashboardView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="range",
                type=OpenApiTypes.STR,
                required=False,
                enum=list(RANGE_FILTERS),
                description="Time filter. Defaults to today (server timezone).",
            )
        ],
        responses={200: dict},
        description="Revenue, order counts, top products and low-stock alerts.",
    )
    def get(self, request):
        range_filter = (request.query_params.get("range") or RANGE_TODAY).strip()

        try:
            data = build_dashboard(range_filter)
        except UnknownRangeError as exc:
            return error_response(
                code="INVALID_RANGE",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(data, status=status.HTTP_200_OK)
