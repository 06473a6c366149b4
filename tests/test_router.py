from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from airport_ticketing.itineraries.schemas import ItineraryStatus, ServiceType
from airport_ticketing.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def confirmed_itinerary(service_rates, create_flight, create_itinerary):
    first_leg = create_flight(base_fare=Decimal('150.00'))
    second_leg = create_flight(base_fare=Decimal('220.00'), origin='Paris', destination='Rome')
    return create_itinerary(
        [first_leg, second_leg],
        pnr='PQR678',
        baggage_weights=['35.70'],
        services=[service_rates[ServiceType.UPGRADED_MEAL], service_rates[ServiceType.PREFERRED_SEAT]],
    )


class TestTicketRoutes:
    def test_issue_ticket(self, client, auth_headers, confirmed_itinerary):
        response = client.post('/api/v1/tickets/issue', json={'pnr': 'PQR678'}, headers=auth_headers(7))

        assert response.status_code == 201
        body = response.json()
        assert body['pnr'] == 'PQR678'
        assert Decimal(str(body['fare'])) == Decimal('1990.00')
        assert body['issued_by_employee_id'] == 7
        assert body['boarding_credential'].startswith('EB-')
        assert body['boarding_credential'].endswith(f'-{confirmed_itinerary.id}')

    def test_issue_ticket_requires_token(self, client, confirmed_itinerary):
        response = client.post('/api/v1/tickets/issue', json={'pnr': 'PQR678'})

        assert response.status_code == 401

    def test_issue_ticket_rejects_bad_token(self, client, confirmed_itinerary):
        response = client.post(
            '/api/v1/tickets/issue', json={'pnr': 'PQR678'}, headers={'Authorization': 'Bearer not-a-token'}
        )

        assert response.status_code == 401

    def test_issue_ticket_twice(self, client, auth_headers, confirmed_itinerary):
        client.post('/api/v1/tickets/issue', json={'pnr': 'PQR678'}, headers=auth_headers())

        response = client.post('/api/v1/tickets/issue', json={'pnr': 'PQR678'}, headers=auth_headers())

        assert response.status_code == 409
        assert response.json()['error_code'] == 'INVALID_STATE'
        assert response.json()['retryable'] is False

    def test_issue_ticket_unknown_pnr(self, client, auth_headers):
        response = client.post('/api/v1/tickets/issue', json={'pnr': 'NOPE00'}, headers=auth_headers())

        assert response.status_code == 404
        assert response.json()['error_code'] == 'NOT_FOUND'

    def test_issue_ticket_capacity_exceeded(self, client, auth_headers, create_flight, create_itinerary):
        flight = create_flight(seat_capacity=1)
        create_itinerary([flight], pnr='SEAT01')
        create_itinerary([flight], pnr='SEAT02')
        client.post('/api/v1/tickets/issue', json={'pnr': 'SEAT01'}, headers=auth_headers())

        response = client.post('/api/v1/tickets/issue', json={'pnr': 'SEAT02'}, headers=auth_headers())

        assert response.status_code == 409
        assert response.json()['error_code'] == 'CAPACITY_EXCEEDED'
        assert response.json()['flight_ids'] == [flight.id]

    def test_ticket_details_projection(self, client, auth_headers, confirmed_itinerary):
        client.post('/api/v1/tickets/issue', json={'pnr': 'PQR678'}, headers=auth_headers(3))

        response = client.get('/api/v1/tickets/details', params={'pnr': 'PQR678'})

        assert response.status_code == 200
        rows = response.json()['tickets']
        assert [row['destination'] for row in rows] == ['Paris', 'Rome']
        assert {row['issued_by_employee_id'] for row in rows} == {3}
        assert rows[0]['passenger_name'].startswith('Passenger')

    def test_ticket_details_filtered_by_employee(self, client, auth_headers, confirmed_itinerary):
        client.post('/api/v1/tickets/issue', json={'pnr': 'PQR678'}, headers=auth_headers(3))

        response = client.get('/api/v1/tickets/details', params={'employee_id': 4})

        assert response.json()['total'] == 0

    def test_flight_availability(self, client, auth_headers, create_flight, create_itinerary):
        flight = create_flight(seat_capacity=2)
        create_itinerary([flight], pnr='AVAIL1')
        client.post('/api/v1/tickets/issue', json={'pnr': 'AVAIL1'}, headers=auth_headers())

        response = client.get(f'/api/v1/tickets/flights/{flight.id}/availability')

        assert response.status_code == 200
        assert response.json()['remaining_seats'] == 1

    def test_flight_availability_unknown(self, client):
        assert client.get('/api/v1/tickets/flights/999/availability').status_code == 404


class TestItineraryRoutes:
    def test_get_itinerary(self, client, confirmed_itinerary):
        response = client.get('/api/v1/itineraries/PQR678')

        assert response.status_code == 200
        body = response.json()
        assert body['status'] == ItineraryStatus.CONFIRMED.value
        assert len(body['segments']) == 2
        assert {service['service_type'] for service in body['services']} == {'Upgraded Meal', 'Preferred Seat'}

    def test_get_itinerary_not_found(self, client):
        assert client.get('/api/v1/itineraries/NOPE00').status_code == 404

    def test_fare_quote_has_no_side_effects(self, client, confirmed_itinerary):
        first = client.get('/api/v1/itineraries/PQR678/fare').json()
        second = client.get('/api/v1/itineraries/PQR678/fare').json()

        assert first == second
        assert first['leg_count'] == 2
        assert Decimal(str(first['breakdown']['total_fare'])) == Decimal('1990.00')
        assert client.get('/api/v1/itineraries/PQR678').json()['status'] == ItineraryStatus.CONFIRMED.value


def test_health(client):
    assert client.get('/health').json() == {'status': 'healthy'}
