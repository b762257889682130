import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from mgnrega_api.db.repository import get_latest_performance, get_recent_performance, list_districts
from mgnrega_api.services.data_generator import (
    current_period,
    generate_district_data,
    month_short_name,
    trailing_periods,
)
from mgnrega_api.services.district_directory import fallback_districts
from mgnrega_api.services.geo import find_nearest_district

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

TREND_MONTHS = 7


class LocationQuery(BaseModel):
    lat: Optional[float] = Field(default=None, allow_inf_nan=False)
    lng: Optional[float] = Field(default=None, allow_inf_nan=False)


def _cache(request):
    return request.app.state.cache


def _session(request):
    return request.app.state.session_factory()


def _synthetic_performance(district_code):
    month, year = current_period()
    return generate_district_data(district_code, month, year)


def _trend_point(month, year, data):
    return {
        "month": month_short_name(month),
        "year": year,
        "workers": data.get("activeWorkers"),
        "expenditure": data.get("totalExpenditure"),
        "works": data.get("completedWorks"),
    }


# ---------- HEALTH ----------
@router.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# ---------- DISTRICTS ----------
@router.get("/districts")
def districts(request: Request):
    cache = _cache(request)
    try:
        if cached := cache.get("districts"):
            return cached
        with _session(request) as session:
            rows = list_districts(session)
        result = rows or fallback_districts()
        cache.set("districts", result)
        return result
    except Exception:
        logger.exception("Error fetching districts")
        return fallback_districts()


# ---------- LOCATION ----------
@router.post("/location-to-district")
def location_to_district(request: Request, payload: Optional[LocationQuery] = None):
    if payload is None or payload.lat is None or payload.lng is None:
        raise HTTPException(status_code=400, detail="Latitude and longitude required")

    cache = _cache(request)
    try:
        candidates = cache.get("districts")
        if not candidates:
            with _session(request) as session:
                candidates = list_districts(session) or fallback_districts()
            cache.set("districts", candidates)
        return {"district": find_nearest_district(payload.lat, payload.lng, candidates)}
    except Exception:
        logger.exception("Error in reverse geocoding")
        raise HTTPException(status_code=500, detail="Location lookup failed")


# ---------- PERFORMANCE ----------
@router.get("/performance/{district_code}")
def performance(request: Request, district_code: str):
    cache = _cache(request)
    cache_key = f"perf_{district_code}"
    try:
        if cached := cache.get(cache_key):
            return cached
        with _session(request) as session:
            data = get_latest_performance(session, district_code)
        if not data:
            data = _synthetic_performance(district_code)
        cache.set(cache_key, data)
        return data
    except Exception:
        logger.exception("Error fetching performance for %s", district_code)
        return _synthetic_performance(district_code)


# ---------- TRENDS ----------
@router.get("/trends/{district_code}")
def trends(request: Request, district_code: str):
    cache = _cache(request)
    cache_key = f"trends_{district_code}"
    try:
        if cached := cache.get(cache_key):
            return cached
        with _session(request) as session:
            rows = get_recent_performance(session, district_code, limit=TREND_MONTHS)

        if rows:
            points = [_trend_point(r["month"], r["year"], r["data"]) for r in reversed(rows)]
        else:
            points = [
                _trend_point(month, year, generate_district_data(district_code, month, year))
                for month, year in trailing_periods(TREND_MONTHS)
            ]
        cache.set(cache_key, points)
        return points
    except Exception:
        logger.exception("Error fetching trends for %s", district_code)
        raise HTTPException(status_code=500, detail="Failed to fetch trends")
