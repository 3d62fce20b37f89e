from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from tripdiary.api.dependencies import get_trip_service
from tripdiary.api.v1.models import DailyTotalResponse, DailyTripRequest
from tripdiary.models.trip import DailyTrip
from tripdiary.repositories.storage.memory import NotFoundError
from tripdiary.services.trips import TripService

router = APIRouter()


@router.get("", response_model=List[DailyTrip])
async def list_trips(trip_service: TripService = Depends(get_trip_service)):
    """List logged trips, newest first."""
    return trip_service.list_trips()


@router.post("", response_model=DailyTrip, status_code=status.HTTP_201_CREATED)
async def log_trip(request: DailyTripRequest, trip_service: TripService = Depends(get_trip_service)):
    """Log a trip with a manually entered distance."""
    try:
        return trip_service.log_trip(name=request.name, distance=request.distance)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/total", response_model=DailyTotalResponse)
async def daily_total(trip_service: TripService = Depends(get_trip_service)):
    return DailyTotalResponse(
        total_km=trip_service.daily_total(),
        trip_count=len(trip_service.list_trips()),
    )


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(trip_id: str, trip_service: TripService = Depends(get_trip_service)):
    try:
        trip_service.delete_trip(trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
