from sqlalchemy import (
    Column, Integer, BigInteger, String, DateTime, Date, ForeignKey, Numeric,
    CheckConstraint, UniqueConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from airport_ticketing.database import Base
from airport_ticketing.itineraries.schemas import (
    ItineraryStatus, SeatClass, SeatStatus, BaggageStatus, ServiceType, Gender, MealPreference
)

# SQLite only autoincrements INTEGER primary keys
Identifier = BigInteger().with_variant(Integer(), "sqlite")

def _in(column: str, enum_type) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_type)
    return f"{column} IN ({values})"

# ================================
# Passengers
# ================================
class Passenger(Base):
    __tablename__ = "passengers"
    __table_args__ = (
        CheckConstraint(_in("gender", Gender), name="ck_passengers_gender"),
        CheckConstraint(_in("meal_preference", MealPreference), name="ck_passengers_meal_preference"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String(10), nullable=False)
    meal_preference = Column(String(15), nullable=False)
    emergency_contact_number = Column(String(15))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    itineraries = relationship("Itinerary", back_populates="passenger")
    
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

# ================================
# Flights
# ================================
class Flight(Base):
    __tablename__ = "flights"
    __table_args__ = (
        CheckConstraint("base_fare >= 0", name="ck_flights_base_fare"),
        CheckConstraint("seat_capacity > 0", name="ck_flights_seat_capacity"),
        CheckConstraint("arrival_time > departure_time", name="ck_flights_schedule"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    flight_number = Column(String(20), unique=True, nullable=False)
    departure_time = Column(DateTime, nullable=False)
    arrival_time = Column(DateTime, nullable=False)
    origin = Column(String(100), nullable=False)
    destination = Column(String(100), nullable=False)
    base_fare = Column(Numeric(10, 2), nullable=False)
    seat_capacity = Column(Integer, nullable=False)
    
    # Relationships
    segments = relationship("ItinerarySegment", back_populates="flight")

# ================================
# Itineraries & Segments
# ================================
class Itinerary(Base):
    __tablename__ = "itineraries"
    __table_args__ = (
        CheckConstraint(_in("status", ItineraryStatus), name="ck_itineraries_status"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    pnr = Column(String(10), unique=True, nullable=False, index=True)
    passenger_id = Column(Identifier, ForeignKey("passengers.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ItineraryStatus.PENDING.value)
    reservation_date = Column(Date, nullable=False, server_default=func.current_date())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Relationships
    passenger = relationship("Passenger", back_populates="itineraries")
    segments = relationship(
        "ItinerarySegment", back_populates="itinerary",
        order_by="ItinerarySegment.segment_number", cascade="all, delete-orphan"
    )
    services = relationship("ItineraryService", back_populates="itinerary", cascade="all, delete-orphan")
    baggage = relationship("Baggage", back_populates="itinerary", cascade="all, delete-orphan")
    ticket = relationship("Ticket", back_populates="itinerary", uselist=False)

class ItinerarySegment(Base):
    __tablename__ = "itinerary_segments"
    __table_args__ = (
        UniqueConstraint("flight_id", "seat_number", name="uq_segments_flight_seat"),
        CheckConstraint(_in("seat_class", SeatClass), name="ck_segments_seat_class"),
        CheckConstraint(_in("seat_status", SeatStatus), name="ck_segments_seat_status"),
    )
    
    itinerary_id = Column(Identifier, ForeignKey("itineraries.id", ondelete="CASCADE"), primary_key=True)
    segment_number = Column(Integer, primary_key=True)
    flight_id = Column(Identifier, ForeignKey("flights.id"), nullable=False, index=True)
    seat_number = Column(String(5))
    seat_class = Column(String(10), nullable=False, default=SeatClass.ECONOMY.value)
    seat_status = Column(String(10), nullable=False, default=SeatStatus.AVAILABLE.value)
    
    # Relationships
    itinerary = relationship("Itinerary", back_populates="segments")
    flight = relationship("Flight", back_populates="segments")

# ================================
# Ancillary Services & Baggage
# ================================
class ServiceRate(Base):
    __tablename__ = "service_rates"
    __table_args__ = (
        CheckConstraint(_in("service_type", ServiceType), name="ck_service_rates_type"),
        CheckConstraint("service_fee > 0", name="ck_service_rates_fee"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    service_type = Column(String(20), unique=True, nullable=False)
    service_fee = Column(Numeric(10, 2), nullable=False)

class ItineraryService(Base):
    __tablename__ = "itinerary_services"
    __table_args__ = (
        UniqueConstraint("itinerary_id", "service_rate_id", name="uq_itinerary_services"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    itinerary_id = Column(Identifier, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False, index=True)
    service_rate_id = Column(Identifier, ForeignKey("service_rates.id"), nullable=False)
    
    # Relationships
    itinerary = relationship("Itinerary", back_populates="services")
    service_rate = relationship("ServiceRate")

class Baggage(Base):
    __tablename__ = "baggage"
    __table_args__ = (
        CheckConstraint("weight >= 0", name="ck_baggage_weight"),
        CheckConstraint(_in("status", BaggageStatus), name="ck_baggage_status"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    itinerary_id = Column(Identifier, ForeignKey("itineraries.id", ondelete="CASCADE"), nullable=False, index=True)
    weight = Column(Numeric(10, 2), nullable=False)
    status = Column(String(10), nullable=False, default=BaggageStatus.CHECKED_IN.value)
    
    # Relationships
    itinerary = relationship("Itinerary", back_populates="baggage")

# ================================
# Tickets
# ================================
class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        CheckConstraint("fare >= 0", name="ck_tickets_fare"),
    )
    
    id = Column(Identifier, primary_key=True, index=True)
    itinerary_id = Column(Identifier, ForeignKey("itineraries.id", ondelete="CASCADE"), unique=True, nullable=False)
    boarding_credential = Column(String(50), unique=True, nullable=False)
    issued_by_employee_id = Column(BigInteger, index=True)
    issued_at = Column(DateTime, nullable=False)
    fare = Column(Numeric(10, 2), nullable=False)
    
    # Relationships
    itinerary = relationship("Itinerary", back_populates="ticket")
