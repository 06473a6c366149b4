from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

class ItineraryStatus(str, Enum):
    """Itinerary status enumeration"""
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    TICKET_ISSUED = "Ticket Issued"

class SeatClass(str, Enum):
    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST_CLASS = "FirstClass"

class SeatStatus(str, Enum):
    AVAILABLE = "Available"
    RESERVED = "Reserved"

class ServiceType(str, Enum):
    """Ancillary service catalog types"""
    EXTRA_BAGGAGE = "Extra Baggage"
    UPGRADED_MEAL = "Upgraded Meal"
    PREFERRED_SEAT = "Preferred Seat"

class BaggageStatus(str, Enum):
    CHECKED_IN = "CheckedIn"
    LOADED = "Loaded"

class MealPreference(str, Enum):
    VEGETARIAN = "Vegetarian"
    NON_VEGETARIAN = "Non-Vegetarian"

class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

class FlightInfo(BaseModel):
    id: int
    flight_number: str
    origin: str
    destination: str
    departure_time: datetime
    arrival_time: datetime
    base_fare: Decimal
    seat_capacity: int
    
    class Config:
        from_attributes = True

class SegmentInfo(BaseModel):
    segment_number: int
    seat_number: Optional[str] = None
    seat_class: SeatClass
    seat_status: SeatStatus
    flight: FlightInfo
    
    class Config:
        from_attributes = True

class SelectedService(BaseModel):
    service_type: ServiceType
    service_fee: Decimal

class BaggageInfo(BaseModel):
    id: int
    weight: Decimal
    status: BaggageStatus
    
    class Config:
        from_attributes = True

class ItineraryDetail(BaseModel):
    """Itinerary aggregate as seen by ticketing staff"""
    id: int
    pnr: str
    passenger_id: int
    passenger_name: str
    status: ItineraryStatus
    reservation_date: date
    segments: List[SegmentInfo] = []
    services: List[SelectedService] = []
    baggage: List[BaggageInfo] = []
