"""
Test configuration and fixtures

The package reads its settings at import time, so the database URL has to
point at a throwaway SQLite file before anything from airport_ticketing is
imported. The schema is recreated for every test.
"""

import os
import tempfile
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_dir = Path(tempfile.mkdtemp(prefix='airport_ticketing_test_'))
    os.environ['DATABASE_URL'] = f'sqlite:///{test_dir / "ticketing.db"}'
    os.environ['SECRET_KEY'] = 'test-secret-key'
    os.environ['LOCK_TIMEOUT_MS'] = '30000'
    os.environ['LOG_LEVEL'] = 'WARNING'


_early_setup_test_environment()

import itertools  # noqa: E402
from datetime import date, datetime, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402

from airport_ticketing.config import settings  # noqa: E402
from airport_ticketing.database import Base, SessionLocal, engine  # noqa: E402
from airport_ticketing.itineraries.schemas import (  # noqa: E402
    ItineraryStatus,
    SeatStatus,
    ServiceType,
)
from airport_ticketing.models import (  # noqa: E402
    Baggage,
    Flight,
    Itinerary,
    ItineraryService,
    ItinerarySegment,
    Passenger,
    ServiceRate,
)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session(reset_database):
    session = SessionLocal(expire_on_commit=False)
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def service_rates(db_session):
    """The standard catalog: Extra Baggage 100/kg, Upgraded Meal 20, Preferred Seat 30"""
    rates = {
        ServiceType.EXTRA_BAGGAGE: ServiceRate(service_type=ServiceType.EXTRA_BAGGAGE.value, service_fee=Decimal('100.00')),
        ServiceType.UPGRADED_MEAL: ServiceRate(service_type=ServiceType.UPGRADED_MEAL.value, service_fee=Decimal('20.00')),
        ServiceType.PREFERRED_SEAT: ServiceRate(service_type=ServiceType.PREFERRED_SEAT.value, service_fee=Decimal('30.00')),
    }
    db_session.add_all(rates.values())
    db_session.commit()
    return rates


@pytest.fixture
def create_flight(db_session):
    """Flight factory fixture"""
    counter = itertools.count(1)

    def _factory(
        base_fare: Decimal = Decimal('150.00'),
        seat_capacity: int = 180,
        origin: str = 'London',
        destination: str = 'Paris',
    ) -> Flight:
        number = next(counter)
        departure = datetime(2026, 11, 1, 8, 30) + timedelta(days=number)
        flight = Flight(
            flight_number=f'BA{number:03d}',
            departure_time=departure,
            arrival_time=departure + timedelta(hours=2),
            origin=origin,
            destination=destination,
            base_fare=base_fare,
            seat_capacity=seat_capacity,
        )
        db_session.add(flight)
        db_session.commit()
        return flight

    return _factory


@pytest.fixture
def create_itinerary(db_session):
    """Itinerary factory fixture: one passenger, one segment per flight"""
    counter = itertools.count(1)

    def _factory(
        flights,
        status: ItineraryStatus = ItineraryStatus.CONFIRMED,
        pnr: str = None,
        baggage_weights=(),
        services=(),
        seat_statuses=None,
    ) -> Itinerary:
        number = next(counter)
        passenger = Passenger(
            first_name='Passenger',
            last_name=f'No{number}',
            email=f'passenger{number}@email.com',
            date_of_birth=date(1990, 1, 1),
            gender='Other',
            meal_preference='Vegetarian',
        )
        db_session.add(passenger)
        db_session.flush()

        itinerary = Itinerary(
            pnr=pnr or f'PNR{number:03d}',
            passenger_id=passenger.id,
            status=status.value,
            reservation_date=date(2026, 10, 17),
        )
        seat_statuses = seat_statuses or [SeatStatus.AVAILABLE] * len(flights)
        itinerary.segments = [
            ItinerarySegment(
                segment_number=position,
                flight_id=flight.id,
                seat_number=f'{number}{chr(64 + position)}',
                seat_status=seat_status.value,
            )
            for position, (flight, seat_status) in enumerate(zip(flights, seat_statuses), start=1)
        ]
        itinerary.baggage = [Baggage(weight=Decimal(weight)) for weight in baggage_weights]
        itinerary.services = [ItineraryService(service_rate_id=rate.id) for rate in services]
        db_session.add(itinerary)
        db_session.commit()
        return itinerary

    return _factory


@pytest.fixture
def frozen_clock():
    return lambda: datetime(2026, 10, 17, 12, 30, 45)


@pytest.fixture
def auth_headers():
    def _headers(employee_id: int = 1) -> dict:
        token = jwt.encode({'employee_id': employee_id}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        return {'Authorization': f'Bearer {token}'}

    return _headers
