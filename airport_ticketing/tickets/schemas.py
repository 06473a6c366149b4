from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

class FareBreakdown(BaseModel):
    """Fare components for one itinerary"""
    base_fare: Decimal
    excess_baggage_kg: Decimal
    baggage_fee: Decimal
    meal_fee: Decimal
    seat_fee: Decimal
    total_fare: Decimal
    currency: str = "USD"

class FareQuote(BaseModel):
    pnr: str
    leg_count: int
    breakdown: FareBreakdown

class IssueTicketRequest(BaseModel):
    pnr: str = Field(..., min_length=1, max_length=10, description="Passenger name record")

class IssuedTicket(BaseModel):
    """Result of a successful issuance"""
    ticket_id: int
    pnr: str
    boarding_credential: str
    fare: Decimal
    issued_at: datetime
    issued_by_employee_id: int
    seats_reserved: int

class TicketDetail(BaseModel):
    """One row of the ticket details projection (ticket x segment)"""
    ticket_id: int
    pnr: str
    passenger_name: str
    flight_number: str
    origin: str
    destination: str
    valid_from: datetime
    valid_to: datetime
    boarding_credential: str
    fare: Decimal
    issued_at: datetime
    issued_by_employee_id: Optional[int] = None

class TicketDetailList(BaseModel):
    tickets: List[TicketDetail]
    total: int

class FlightAvailability(BaseModel):
    flight_id: int
    flight_number: str
    seat_capacity: int
    issued_seats: int
    remaining_seats: int
