from typing import List, Optional
from sqlalchemy.orm import Session
from airport_ticketing.models import Flight, Itinerary, ItinerarySegment, Passenger, Ticket
from airport_ticketing.tickets.schemas import TicketDetail

class TicketReportService:
    @staticmethod
    def get_ticket_details(
        db: Session,
        pnr: Optional[str] = None,
        employee_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[TicketDetail]:
        """Ticket x itinerary x passenger x flight, one row per flight leg"""
        query = db.query(
            Ticket, Itinerary.pnr, Passenger.first_name, Passenger.last_name, Flight
        ).join(
            Itinerary, Ticket.itinerary_id == Itinerary.id
        ).join(
            Passenger, Itinerary.passenger_id == Passenger.id
        ).join(
            ItinerarySegment, ItinerarySegment.itinerary_id == Itinerary.id
        ).join(
            Flight, ItinerarySegment.flight_id == Flight.id
        )
        
        if pnr:
            query = query.filter(Itinerary.pnr == pnr)
        if employee_id is not None:
            query = query.filter(Ticket.issued_by_employee_id == employee_id)
        
        rows = query.order_by(
            Ticket.id, ItinerarySegment.segment_number
        ).offset(skip).limit(limit).all()
        
        return [
            TicketDetail(
                ticket_id=ticket.id,
                pnr=ticket_pnr,
                passenger_name=f"{first_name} {last_name}",
                flight_number=flight.flight_number,
                origin=flight.origin,
                destination=flight.destination,
                valid_from=flight.departure_time,
                valid_to=flight.arrival_time,
                boarding_credential=ticket.boarding_credential,
                fare=ticket.fare,
                issued_at=ticket.issued_at,
                issued_by_employee_id=ticket.issued_by_employee_id,
            )
            for ticket, ticket_pnr, first_name, last_name, flight in rows
        ]
