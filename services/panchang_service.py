# panchang_service.py
import logging
from datetime import date
from typing import Optional

from models.panchang import AlmanacRecord
from schemas.request_schema import PanchangRequest
from services.aggregator import fetch_panchang
from services.astrology_client import AstrologyClient
from services.fallback import compute_fallback_panchang

logger = logging.getLogger(__name__)


def fallback_for_request(request: PanchangRequest) -> AlmanacRecord:
    return compute_fallback_panchang(
        year=request.year,
        month=request.month,
        day=request.date,
        latitude=request.latitude,
        longitude=request.longitude,
        hours=request.hours,
        minutes=request.minutes,
        seconds=request.seconds,
        timezone=request.timezone,
    )


def fallback_for_date(on: date, latitude: float, longitude: float) -> AlmanacRecord:
    """Approximation used by the GET endpoints (06:00 IST)."""
    return compute_fallback_panchang(
        year=on.year,
        month=on.month,
        day=on.day,
        latitude=latitude,
        longitude=longitude,
    )


async def generate_panchang(request: PanchangRequest, client: Optional[AstrologyClient] = None) -> AlmanacRecord:
    """Provider data when any of it is reachable, the local approximation otherwise."""
    try:
        return await fetch_panchang(request.provider_payload(), client=client)
    except Exception as e:
        logger.warning("Provider aggregation failed, using computed fallback: %s", e)
        return fallback_for_request(request)
