from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import jsonify, request

from ..core.exceptions import ValidationError
from ..periods.model import PayrollPeriod
from ..periods.service import PeriodService
from .serializers import to_json


def ok(data: Any = None, status: int = 200, **extra):
    body = {"success": True, "data": to_json(data)}
    body.update({k: to_json(v) for k, v in extra.items()})
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def period_from(source: Mapping[str, Any], periods: PeriodService) -> PayrollPeriod:
    """``start``/``end`` from a query string or body; the current period when both are absent."""

    start: Optional[str] = source.get("start") or source.get("period_start")
    end: Optional[str] = source.get("end") or source.get("period_end")
    if not start and not end:
        return periods.current_period()
    if not start or not end:
        raise ValidationError("Both start and end are required")
    return PayrollPeriod.parse(start, end)


def employee_ids_from(source: Mapping[str, Any], field_name: str = "employee_ids") -> list[int]:
    raw = source.get(field_name)
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [part for part in raw.split(",") if part.strip()]
    if not isinstance(raw, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list")
    try:
        return [int(v) for v in raw]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must contain integers")
