from datetime import datetime, timezone
from pydantic import BaseModel, Field


class DailyTrip(BaseModel):
    id: str
    name: str
    distance: float = Field(..., ge=0, allow_inf_nan=False, description="Distance in kilometers")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
