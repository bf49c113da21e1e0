# backend/responses.py
"""
PATH: backend/responses.py

API ERROR ENVELOPE

Every handled domain error leaves the API as:
    {"error": {"code": "<STABLE_CODE>", "message": "<human text>"}}
"""

from __future__ import annotations

from rest_framework.response import Response


def error_response(*, code: str, message: str, http_status: int) -> Response:
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )
