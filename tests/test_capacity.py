from datetime import datetime
from decimal import Decimal

import pytest

from airport_ticketing.exceptions import CapacityExceededError
from airport_ticketing.itineraries.schemas import ItineraryStatus
from airport_ticketing.models import Ticket
from airport_ticketing.tickets.capacity import CapacityLedger


@pytest.fixture
def issue_directly(db_session):
    """Mark an itinerary as ticketed without going through issuance"""

    def _issue(itinerary):
        itinerary.status = ItineraryStatus.TICKET_ISSUED.value
        db_session.add(Ticket(
            itinerary_id=itinerary.id,
            boarding_credential=f'EB-TEST-{itinerary.id}',
            issued_by_employee_id=1,
            issued_at=datetime(2026, 10, 17, 9, 0),
            fare=Decimal('100.00'),
        ))
        db_session.commit()

    return _issue


class TestCapacityLedger:
    def test_issued_counts_only_ticketed_itineraries(self, db_session, create_flight, create_itinerary, issue_directly):
        flight = create_flight(seat_capacity=5)
        issue_directly(create_itinerary([flight]))
        issue_directly(create_itinerary([flight]))
        create_itinerary([flight])
        create_itinerary([flight], status=ItineraryStatus.PENDING)

        counts = CapacityLedger(db_session).issued_seat_counts([flight.id])

        assert counts == {flight.id: 2}

    def test_counts_default_to_zero(self, db_session, create_flight):
        flight = create_flight()

        assert CapacityLedger(db_session).issued_seat_counts([flight.id]) == {flight.id: 0}

    def test_check_capacity_admits_last_seat(self, db_session, create_flight, create_itinerary, issue_directly):
        flight = create_flight(seat_capacity=2)
        issue_directly(create_itinerary([flight]))
        candidate = create_itinerary([flight])

        flights = CapacityLedger(db_session).check_capacity(candidate)

        assert [locked.id for locked in flights] == [flight.id]

    def test_check_capacity_rejects_full_flight(self, db_session, create_flight, create_itinerary, issue_directly):
        flight = create_flight(seat_capacity=1)
        issue_directly(create_itinerary([flight]))
        candidate = create_itinerary([flight])

        with pytest.raises(CapacityExceededError) as exc_info:
            CapacityLedger(db_session).check_capacity(candidate)

        assert exc_info.value.flight_ids == [flight.id]
        assert exc_info.value.status_code == 409

    def test_check_capacity_lists_only_full_legs(self, db_session, create_flight, create_itinerary, issue_directly):
        open_leg = create_flight(seat_capacity=10)
        full_leg = create_flight(seat_capacity=1)
        issue_directly(create_itinerary([full_leg]))
        candidate = create_itinerary([open_leg, full_leg])

        with pytest.raises(CapacityExceededError) as exc_info:
            CapacityLedger(db_session).check_capacity(candidate)

        assert exc_info.value.flight_ids == [full_leg.id]

    def test_check_capacity_lists_every_full_leg(self, db_session, create_flight, create_itinerary, issue_directly):
        first = create_flight(seat_capacity=1)
        second = create_flight(seat_capacity=1)
        issue_directly(create_itinerary([first, second]))
        candidate = create_itinerary([second, first])

        with pytest.raises(CapacityExceededError) as exc_info:
            CapacityLedger(db_session).check_capacity(candidate)

        assert exc_info.value.flight_ids == sorted([first.id, second.id])

    def test_availability(self, db_session, create_flight, create_itinerary, issue_directly):
        flight = create_flight(seat_capacity=3)
        issue_directly(create_itinerary([flight]))

        availability = CapacityLedger(db_session).availability(flight.id)

        assert availability.issued_seats == 1
        assert availability.remaining_seats == 2

    def test_availability_unknown_flight(self, db_session):
        assert CapacityLedger(db_session).availability(999) is None
