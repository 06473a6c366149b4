from sqlalchemy.orm import Session, joinedload, selectinload
from typing import Dict, FrozenSet, Optional
from airport_ticketing.exceptions import ItineraryNotFoundError, InvalidItineraryStateError
from airport_ticketing.itineraries.schemas import (
    ItineraryStatus, SeatStatus, ItineraryDetail, SegmentInfo, SelectedService, BaggageInfo
)
from airport_ticketing.models import Itinerary, ItinerarySegment, ItineraryService

ALLOWED_TRANSITIONS: Dict[ItineraryStatus, FrozenSet[ItineraryStatus]] = {
    ItineraryStatus.PENDING: frozenset({
        ItineraryStatus.CONFIRMED, ItineraryStatus.CANCELLED, ItineraryStatus.TICKET_ISSUED
    }),
    ItineraryStatus.CONFIRMED: frozenset({
        ItineraryStatus.CANCELLED, ItineraryStatus.TICKET_ISSUED
    }),
    ItineraryStatus.CANCELLED: frozenset(),
    ItineraryStatus.TICKET_ISSUED: frozenset(),
}

class ItineraryStore:
    """Access to itinerary aggregates inside the caller's transaction"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_pnr(self, pnr: str) -> Optional[Itinerary]:
        """Get itinerary by PNR with its whole aggregate loaded"""
        return self.db.query(Itinerary).options(
            joinedload(Itinerary.passenger),
            selectinload(Itinerary.segments).joinedload(ItinerarySegment.flight),
            selectinload(Itinerary.services).joinedload(ItineraryService.service_rate),
            selectinload(Itinerary.baggage),
        ).filter(Itinerary.pnr == pnr).first()
    
    def fetch_for_issuance(self, pnr: str) -> Itinerary:
        """Fetch itinerary by PNR holding a row lock until the transaction ends.
        
        Concurrent issuance attempts on the same PNR queue on this lock.
        """
        itinerary = self.db.query(Itinerary).filter(
            Itinerary.pnr == pnr
        ).with_for_update().populate_existing().first()
        
        if itinerary is None:
            raise ItineraryNotFoundError(pnr)
        
        return itinerary
    
    def transition(self, itinerary: Itinerary, target: ItineraryStatus) -> None:
        """Move itinerary to target status if the state machine allows it"""
        current = ItineraryStatus(itinerary.status)
        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidItineraryStateError(
                current.value,
                f"Cannot move itinerary {itinerary.pnr} from {current.value} to {target.value}"
            )
        itinerary.status = target.value
    
    def reserve_available_seats(self, itinerary: Itinerary) -> int:
        """Flip every Available segment of the itinerary to Reserved"""
        reserved = self.db.query(ItinerarySegment).filter(
            ItinerarySegment.itinerary_id == itinerary.id,
            ItinerarySegment.seat_status == SeatStatus.AVAILABLE.value
        ).update(
            {ItinerarySegment.seat_status: SeatStatus.RESERVED.value},
            synchronize_session="fetch"
        )
        return reserved
    
    @staticmethod
    def to_detail(itinerary: Itinerary) -> ItineraryDetail:
        """Convert ORM aggregate to the response model"""
        return ItineraryDetail(
            id=itinerary.id,
            pnr=itinerary.pnr,
            passenger_id=itinerary.passenger_id,
            passenger_name=itinerary.passenger.full_name,
            status=ItineraryStatus(itinerary.status),
            reservation_date=itinerary.reservation_date,
            segments=[SegmentInfo.model_validate(segment) for segment in itinerary.segments],
            services=[
                SelectedService(
                    service_type=selected.service_rate.service_type,
                    service_fee=selected.service_rate.service_fee
                )
                for selected in itinerary.services
            ],
            baggage=[BaggageInfo.model_validate(item) for item in itinerary.baggage],
        )
