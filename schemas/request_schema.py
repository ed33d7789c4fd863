# schemas/request_schema.py
import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ProviderConfig(BaseModel):
    observation_point: str = "topocentric"
    ayanamsha: str = "lahiri"


class PanchangRequest(BaseModel):
    """POST body. Required fields are optional here so that absence can be
    reported with a single message instead of pydantic's per-field errors."""

    year: Optional[int] = Field(None, ge=1, le=9999)
    month: Optional[int] = Field(None, ge=1, le=12)
    date: Optional[int] = Field(None, ge=1, le=31)
    hours: int = Field(6, ge=0, le=23)
    minutes: int = Field(0, ge=0, le=59)
    seconds: int = Field(0, ge=0, le=59)
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)
    timezone: float = Field(5.5, ge=-14, le=14)
    config: ProviderConfig = Field(default_factory=ProviderConfig)

    def missing_fields(self) -> List[str]:
        return [
            name
            for name in ("year", "month", "date", "latitude", "longitude")
            if getattr(self, name) is None
        ]

    def provider_payload(self) -> dict:
        """Body shared by every provider endpoint."""
        return self.model_dump()


class PanchangQuery(BaseModel):
    date: Optional[datetime.date] = None
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)

    def missing_fields(self) -> List[str]:
        return [name for name in ("date", "latitude", "longitude") if getattr(self, name) is None]
