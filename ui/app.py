from __future__ import annotations

import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from lifeos import (
    create_daily_review,
    create_weekly_review,
    dashboard_snapshot,
    get_life_map_chart_data,
    list_reviews,
    load_daily_review,
    load_life_map,
    load_weekly_review,
    parse_iso_date,
    update_daily_review,
    update_life_map,
    update_weekly_review,
    workspace_root,
)
from lifeos.models import LifeMap


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="Life OS", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("LIFEOS_USERNAME", "")
    expected_password = os.environ.get("LIFEOS_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Helpers ───────────────────────────────────────────────────


def _check_date(date: str) -> None:
    try:
        parse_iso_date(date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Expected YYYY-MM-DD")


def _raise_for(errors: list[str]) -> None:
    """Map store errors to an HTTP status: duplicates 409, missing 404, else 400."""
    detail = "; ".join(errors)
    if any(e.endswith("already exists") for e in errors):
        raise HTTPException(status_code=409, detail=detail)
    if any(e.endswith("not found") for e in errors):
        raise HTTPException(status_code=404, detail=detail)
    raise HTTPException(status_code=400, detail=detail)


def _life_map_response(life_map: LifeMap) -> dict[str, Any]:
    return {
        **life_map.to_dict(),
        "chartData": [item.to_dict() for item in get_life_map_chart_data(life_map)],
    }


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/reviews")
def api_list_reviews(
    review_type: str = Query(default="all", alias="type"),
    sort: str = Query(default="desc"),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    """Combined daily and weekly review list."""
    try:
        reviews = list_reviews(review_type, sort, workspace_root())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"reviews": reviews}


@app.post("/api/reviews/daily", status_code=201)
def api_create_daily(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    review, errors = create_daily_review(payload, workspace_root())
    if errors:
        _raise_for(errors)
    return {"ok": True, "review": review.to_dict()}


@app.get("/api/reviews/daily/{date}")
def api_get_daily(date: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    _check_date(date)
    review = load_daily_review(date, workspace_root())
    if review is None:
        raise HTTPException(status_code=404, detail=f"Review for {date} not found")
    return {"review": review.to_dict()}


@app.put("/api/reviews/daily/{date}")
def api_update_daily(date: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    _check_date(date)
    review, errors = update_daily_review(date, payload, workspace_root())
    if errors:
        _raise_for(errors)
    return {"ok": True, "review": review.to_dict()}


@app.post("/api/reviews/weekly", status_code=201)
def api_create_weekly(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    review, errors = create_weekly_review(payload, workspace_root())
    if errors:
        _raise_for(errors)
    return {"ok": True, "review": review.to_dict()}


@app.get("/api/reviews/weekly/{date}")
def api_get_weekly(date: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    _check_date(date)
    review = load_weekly_review(date, workspace_root())
    if review is None:
        raise HTTPException(status_code=404, detail=f"Review for {date} not found")
    return {"review": review.to_dict()}


@app.put("/api/reviews/weekly/{date}")
def api_update_weekly(date: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    _check_date(date)
    review, errors = update_weekly_review(date, payload, workspace_root())
    if errors:
        _raise_for(errors)
    return {"ok": True, "review": review.to_dict()}


@app.get("/api/life-map")
def api_get_life_map(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return _life_map_response(load_life_map(workspace_root()))


@app.put("/api/life-map")
def api_update_life_map(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Partial update: only the domains present in the body change."""
    life_map, errors = update_life_map(payload, workspace_root())
    if errors:
        _raise_for(errors)
    return {"ok": True, **_life_map_response(life_map)}


@app.get("/api/dashboard")
def api_dashboard(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return dashboard_snapshot(workspace_root())
