from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from airport_ticketing.database import get_db
from airport_ticketing.itineraries.schemas import ItineraryDetail
from airport_ticketing.itineraries.service import ItineraryStore
from airport_ticketing.tickets.fare_service import FareCalculationService
from airport_ticketing.tickets.schemas import FareQuote

router = APIRouter()

def _get_itinerary_or_404(db: Session, pnr: str):
    itinerary = ItineraryStore(db).get_by_pnr(pnr)
    
    if not itinerary:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Itinerary not found"
        )
    
    return itinerary

@router.get("/{pnr}", response_model=ItineraryDetail)
def get_itinerary(
    pnr: str,
    db: Session = Depends(get_db)
):
    """Get itinerary with segments, services and baggage"""
    itinerary = _get_itinerary_or_404(db, pnr)
    return ItineraryStore.to_detail(itinerary)

@router.get("/{pnr}/fare", response_model=FareQuote)
def get_itinerary_fare(
    pnr: str,
    db: Session = Depends(get_db)
):
    """Quote the ticket fare for an itinerary without issuing anything"""
    itinerary = _get_itinerary_or_404(db, pnr)
    breakdown = FareCalculationService(db).quote_itinerary(itinerary)
    
    return FareQuote(
        pnr=itinerary.pnr,
        leg_count=len(itinerary.segments),
        breakdown=breakdown
    )
