"""Flask REST API exposing the budget analytics services."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from finance_core.config import Settings
from finance_core.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from finance_core.models import Snapshot, default_categories
from finance_core.services import Dashboard, DashboardService
from finance_core.sorting import SortConfig
from finance_core.storage import SnapshotStorage
from finance_core.validators import (
    SORT_DIRECTIONS,
    SORT_KEYS,
    validate_datetime,
    validate_enum,
    validate_month_count,
    validate_savings_goal_payload,
)

from .colors import color_hex


def create_app(
    settings: Optional[Settings] = None,
    now_provider: Optional[Callable[[], datetime]] = None,
) -> Flask:
    app = Flask(__name__)
    settings = settings or Settings.from_env()

    if settings.is_development:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app)

    storage = SnapshotStorage(settings.data_dir)
    service_options: Dict[str, Any] = {
        "default_monthly_budget": settings.default_monthly_budget,
        "trend_months": settings.trend_months,
    }
    if now_provider is not None:
        service_options["now_provider"] = now_provider
    dashboards = DashboardService(**service_options)

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _options(raw: Dict[str, Any]) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if raw.get("now"):
            options["now"] = validate_datetime(raw["now"], "now")
        if raw.get("sort") or raw.get("direction"):
            options["sort"] = SortConfig(
                key=validate_enum(raw.get("sort") or "date", "sort", SORT_KEYS),
                direction=validate_enum(raw.get("direction") or "desc", "direction", SORT_DIRECTIONS),
            )
        if raw.get("months") not in (None, ""):
            options["trend_months"] = validate_month_count(raw["months"])
        return options

    def _render(dashboard: Dashboard) -> Dict[str, Any]:
        payload = dashboard.to_dict()
        for item in payload["categoryBreakdown"] + payload["categoryBudgets"]:
            item["colorHex"] = color_hex(item["color"])
        return payload

    @app.post("/dashboard")
    def dashboard_from_body():
        body = _json_body()
        try:
            snapshot = Snapshot.from_dict(body)
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValidationError(f"Malformed snapshot: {exc}") from exc
        sort = body.get("sort") or {}
        if not isinstance(sort, dict):
            raise ValidationError("sort must be an object with key and direction")
        options = _options({
            "now": body.get("now"),
            "sort": sort.get("key"),
            "direction": sort.get("direction"),
            "months": body.get("trendMonths"),
        })
        return _success(_render(dashboards.build(snapshot, **options)))

    @app.get("/users/<user_id>/dashboard")
    def dashboard_for_user(user_id: str):
        snapshot = storage.snapshot(user_id)
        if snapshot.budget is None and not (
            snapshot.expenses or snapshot.categories or snapshot.savings_goals
        ):
            raise RecordNotFoundError(f"No records found for user {user_id}")
        options = _options({
            "now": request.args.get("now"),
            "sort": request.args.get("sort"),
            "direction": request.args.get("direction"),
            "months": request.args.get("months"),
        })
        return _success(_render(dashboards.build(snapshot, **options)))

    @app.post("/savings-goals/validate")
    def validate_savings_goal():
        payload = _json_body()
        normalised = validate_savings_goal_payload(payload)
        return _success({
            "valid": True,
            "goalName": normalised["goalName"],
            "targetAmount": f"{normalised['targetAmount']:.2f}",
            "currentAmount": f"{normalised['currentAmount']:.2f}",
        })

    @app.get("/categories/defaults")
    def list_default_categories():
        user_id = request.args.get("userId", "")
        items = []
        for category in default_categories(user_id):
            item = category.to_dict()
            item["colorHex"] = color_hex(category.color)
            items.append(item)
        return _success({"items": items})

    return app
