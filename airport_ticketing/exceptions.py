"""Errors raised by the ticket issuance core."""
from typing import Iterable, List

class TicketingError(Exception):
    """Base class for caller-facing issuance errors"""
    error_code = "TICKETING_ERROR"
    
    def __init__(self, message: str, status_code: int = 400, retryable: bool = False) -> None:
        self.message = message
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)

class ItineraryNotFoundError(TicketingError):
    error_code = "NOT_FOUND"
    
    def __init__(self, pnr: str) -> None:
        self.pnr = pnr
        super().__init__(f"Itinerary {pnr} not found", 404)

class InvalidItineraryStateError(TicketingError):
    error_code = "INVALID_STATE"
    
    def __init__(self, status: str, message: str = "") -> None:
        self.status = status
        super().__init__(message or f"Itinerary is {status}, expected Confirmed", 409)

class CapacityExceededError(TicketingError):
    error_code = "CAPACITY_EXCEEDED"
    
    def __init__(self, flight_ids: Iterable[int]) -> None:
        self.flight_ids: List[int] = sorted(flight_ids)
        flights = ", ".join(str(flight_id) for flight_id in self.flight_ids)
        super().__init__(f"No seats available on flight(s): {flights}", 409)

class TicketingBusyError(TicketingError):
    """Lock wait timeout or transaction conflict; the call can be retried"""
    error_code = "BUSY"
    
    def __init__(self, message: str = "Ticketing is busy, please retry") -> None:
        super().__init__(message, 503, retryable=True)

class CredentialCollisionError(TicketingError):
    """Boarding credential regeneration exhausted its attempts"""
    error_code = "TEMPORARY_FAILURE"
    
    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__("Temporary failure while issuing ticket, please retry", 503, retryable=True)
