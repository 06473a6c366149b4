from collections import Counter
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from airport_ticketing.exceptions import CapacityExceededError
from airport_ticketing.itineraries.schemas import ItineraryStatus
from airport_ticketing.models import Flight, Itinerary, ItinerarySegment, Ticket
from airport_ticketing.tickets.schemas import FlightAvailability

class CapacityLedger:
    """Per-flight issued seat counts derived from committed tickets.
    
    The counts are only meaningful while the flight rows are locked by
    lock_flights() in the same transaction as the ticket insert.
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    def lock_flights(self, flight_ids: List[int]) -> List[Flight]:
        """Row-lock flights in ascending id order"""
        if not flight_ids:
            return []
        return self.db.query(Flight).filter(
            Flight.id.in_(sorted(set(flight_ids)))
        ).order_by(Flight.id).with_for_update().populate_existing().all()
    
    def issued_seat_counts(self, flight_ids: List[int], exclude_itinerary_id: Optional[int] = None) -> Dict[int, int]:
        """Count issued seats per flight across ticketed itineraries"""
        if not flight_ids:
            return {}
        query = self.db.query(
            ItinerarySegment.flight_id, func.count()
        ).join(
            Itinerary, Itinerary.id == ItinerarySegment.itinerary_id
        ).join(
            Ticket, Ticket.itinerary_id == Itinerary.id
        ).filter(
            ItinerarySegment.flight_id.in_(flight_ids),
            Itinerary.status == ItineraryStatus.TICKET_ISSUED.value
        )
        if exclude_itinerary_id is not None:
            query = query.filter(Itinerary.id != exclude_itinerary_id)
        
        counts = {flight_id: 0 for flight_id in flight_ids}
        for flight_id, issued in query.group_by(ItinerarySegment.flight_id).all():
            counts[flight_id] = issued
        return counts
    
    def check_capacity(self, itinerary: Itinerary) -> List[Flight]:
        """Lock every flight of the itinerary and admit it only if all have room.
        
        Returns the locked flights. Raises CapacityExceededError listing
        every flight that would be oversold.
        """
        demand = Counter(segment.flight_id for segment in itinerary.segments)
        flights = self.lock_flights(list(demand))
        issued = self.issued_seat_counts(list(demand), exclude_itinerary_id=itinerary.id)
        
        full = [
            flight.id for flight in flights
            if issued[flight.id] + demand[flight.id] > flight.seat_capacity
        ]
        if full:
            raise CapacityExceededError(full)
        
        return flights
    
    def availability(self, flight_id: int) -> Optional[FlightAvailability]:
        """Remaining seats on a flight, for reporting"""
        flight = self.db.query(Flight).filter(Flight.id == flight_id).first()
        if not flight:
            return None
        
        issued = self.issued_seat_counts([flight.id])[flight.id]
        return FlightAvailability(
            flight_id=flight.id,
            flight_number=flight.flight_number,
            seat_capacity=flight.seat_capacity,
            issued_seats=issued,
            remaining_seats=max(0, flight.seat_capacity - issued)
        )
