#!/usr/bin/env python3

from datetime import date, datetime, timedelta
from decimal import Decimal

from airport_ticketing.database import SessionLocal, init_db
from airport_ticketing.logging_config import logger
from airport_ticketing.models import (
    Passenger, Flight, ServiceRate, Itinerary, ItinerarySegment, ItineraryService,
    Baggage, Ticket
)
from airport_ticketing.itineraries.schemas import ItineraryStatus, ServiceType

PASSENGERS = [
    ("John", "Smith", "john.smith@email.com", date(1975, 5, 12), "Male", "Vegetarian", "123-456-7890"),
    ("Mary", "Smithson", "mary.s@email.com", date(1980, 10, 25), "Female", "Non-Vegetarian", "234-567-8901"),
    ("Robert", "Williams", "robert.w@email.com", date(1990, 3, 15), "Male", "Vegetarian", "345-678-9012"),
    ("Sarah", "Brown", "sarah.b@email.com", date(1995, 7, 8), "Female", "Vegetarian", "456-789-0123"),
    ("Michael", "Davis", "michael.d@email.com", date(1985, 12, 3), "Male", "Non-Vegetarian", "567-890-1234"),
    ("Jennifer", "Wilson", "jennifer.w@email.com", date(1992, 9, 22), "Female", "Vegetarian", "678-901-2345"),
    ("David", "Taylor", "david.t@email.com", date(1970, 11, 18), "Male", "Non-Vegetarian", "789-012-3456"),
    ("Lisa", "Anderson", "lisa.a@email.com", date(1988, 2, 14), "Female", "Vegetarian", "890-123-4567"),
    ("Thomas", "Garcia", "thomas.g@email.com", date(1998, 6, 30), "Male", "Non-Vegetarian", "901-234-5678"),
    ("Rachel", "Nguyen", "rachel.n@email.com", date(1985, 3, 14), "Female", "Vegetarian", "812-345-6789"),
]

# flight number, departure day offset, departure time, duration hours, origin, destination, base fare, capacity
FLIGHTS = [
    ("BA456", 1, (8, 30), 2.25, "London", "Paris", "150.00", 180),
    ("BA789", 1, (12, 15), 3.25, "Paris", "Rome", "220.00", 160),
    ("BA234", 2, (9, 0), 2.25, "London", "Amsterdam", "135.00", 170),
    ("BA567", 2, (14, 45), 3.25, "Amsterdam", "Berlin", "180.00", 150),
    ("BA890", 3, (7, 30), 5.25, "London", "Barcelona", "210.00", 175),
    ("BA123", 3, (16, 0), 4.25, "Barcelona", "Rome", "195.00", 165),
    ("BA345", 4, (10, 30), 3.5, "London", "Munich", "185.00", 155),
    ("BA678", 4, (17, 15), 4.25, "Munich", "Athens", "250.00", 145),
    ("BA901", 5, (8, 45), 1.75, "London", "Dublin", "120.00", 185),
    ("BA924", 6, (15, 0), 4.25, "Dublin", "Lisbon", "230.00", 160),
]

SERVICE_RATES = [
    (ServiceType.EXTRA_BAGGAGE, "100.00"),
    (ServiceType.UPGRADED_MEAL, "20.00"),
    (ServiceType.PREFERRED_SEAT, "30.00"),
]

# pnr, passenger index, status, [(flight index, seat, class)], [baggage kg], [services]
ITINERARIES = [
    ("ABC123", 0, ItineraryStatus.PENDING, [(0, "12A", "Economy")], ["18.5"], [ServiceType.UPGRADED_MEAL]),
    ("DEF456", 1, ItineraryStatus.PENDING, [(2, "15B", "Economy")], ["22.3"], [ServiceType.PREFERRED_SEAT]),
    ("GHI789", 2, ItineraryStatus.CONFIRMED, [(4, "18C", "Economy")], ["25.7"], [ServiceType.PREFERRED_SEAT]),
    ("JKL012", 3, ItineraryStatus.CONFIRMED, [(6, "21D", "Business")], ["30.0"],
     [ServiceType.UPGRADED_MEAL, ServiceType.PREFERRED_SEAT]),
    ("MNO345", 4, ItineraryStatus.CONFIRMED, [(8, "24E", "Economy")], ["15.5"], []),
    ("PQR678", 5, ItineraryStatus.CONFIRMED, [(0, "13F", "Economy"), (1, "14G", "Economy")], ["28.4"],
     [ServiceType.UPGRADED_MEAL]),
    ("STU901", 6, ItineraryStatus.CONFIRMED, [(2, "16H", "Business"), (3, "17I", "Business")], ["35.2"],
     [ServiceType.PREFERRED_SEAT]),
    ("VWX234", 7, ItineraryStatus.CONFIRMED, [(4, "19J", "Economy"), (5, "20K", "Economy")], ["19.8"], []),
    ("YZA567", 8, ItineraryStatus.CONFIRMED, [(6, "22L", "FirstClass"), (7, "23M", "FirstClass")], ["42.5"],
     [ServiceType.UPGRADED_MEAL, ServiceType.PREFERRED_SEAT]),
    ("BCD890", 9, ItineraryStatus.CANCELLED, [(8, "25N", "Economy"), (9, "26O", "Economy")], ["21.1"],
     [ServiceType.PREFERRED_SEAT]),
]

def create_seed_data():
    init_db()
    db = SessionLocal()
    
    try:
        logger.info("Creating seed data for airport ticket issuance...")
        
        # Clear existing data (in reverse dependency order)
        logger.info("Clearing existing data...")
        db.query(Ticket).delete()
        db.query(ItineraryService).delete()
        db.query(Baggage).delete()
        db.query(ItinerarySegment).delete()
        db.query(Itinerary).delete()
        db.query(ServiceRate).delete()
        db.query(Flight).delete()
        db.query(Passenger).delete()
        
        logger.info("Creating passengers...")
        passengers = [
            Passenger(
                first_name=first_name, last_name=last_name, email=email, date_of_birth=dob,
                gender=gender, meal_preference=meal, emergency_contact_number=phone
            )
            for first_name, last_name, email, dob, gender, meal, phone in PASSENGERS
        ]
        db.add_all(passengers)
        
        logger.info("Creating flights...")
        today = date.today()
        flights = []
        for number, day_offset, (hour, minute), hours, origin, destination, fare, capacity in FLIGHTS:
            departure = datetime.combine(today + timedelta(days=day_offset), datetime.min.time()).replace(
                hour=hour, minute=minute
            )
            flights.append(Flight(
                flight_number=number, departure_time=departure,
                arrival_time=departure + timedelta(hours=hours), origin=origin,
                destination=destination, base_fare=Decimal(fare), seat_capacity=capacity
            ))
        db.add_all(flights)
        
        logger.info("Creating service rates...")
        rates = {
            service_type: ServiceRate(service_type=service_type.value, service_fee=Decimal(fee))
            for service_type, fee in SERVICE_RATES
        }
        db.add_all(rates.values())
        db.flush()
        
        logger.info("Creating itineraries...")
        for pnr, passenger_index, status, legs, weights, services in ITINERARIES:
            itinerary = Itinerary(
                pnr=pnr, passenger_id=passengers[passenger_index].id,
                status=status.value, reservation_date=today
            )
            itinerary.segments = [
                ItinerarySegment(
                    segment_number=position, flight_id=flights[flight_index].id,
                    seat_number=seat, seat_class=seat_class
                )
                for position, (flight_index, seat, seat_class) in enumerate(legs, start=1)
            ]
            itinerary.baggage = [Baggage(weight=Decimal(weight)) for weight in weights]
            itinerary.services = [
                ItineraryService(service_rate_id=rates[service_type].id) for service_type in services
            ]
            db.add(itinerary)
        
        db.commit()
        logger.info(f"Seeded {len(passengers)} passengers, {len(flights)} flights, {len(ITINERARIES)} itineraries")
        
    except Exception:
        db.rollback()
        logger.exception("Error creating seed data")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
