from typing import Optional
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from airport_ticketing.exceptions import (
    TicketingError, InvalidItineraryStateError, TicketingBusyError
)
from airport_ticketing.itineraries.schemas import ItineraryStatus
from airport_ticketing.itineraries.service import ItineraryStore
from airport_ticketing.logging_config import logger
from airport_ticketing.tickets.capacity import CapacityLedger
from airport_ticketing.tickets.credentials import BoardingCredentialGenerator
from airport_ticketing.tickets.fare_service import FareCalculationService
from airport_ticketing.tickets.schemas import IssuedTicket

class TicketIssuanceService:
    """Issues a ticket for a confirmed itinerary in a single transaction.
    
    Steps, all committed together:
    1. lock the itinerary row by PNR
    2. require status Confirmed
    3. lock the itinerary's flights and check seat capacity
    4. compute the fare
    5. move the itinerary to Ticket Issued
    6. insert the ticket with a fresh boarding credential
    7. flip the itinerary's Available seats to Reserved
    
    Any failure rolls the whole transaction back.
    """
    
    def __init__(
        self,
        db: Session,
        credential_generator: Optional[BoardingCredentialGenerator] = None,
        fare_service: Optional[FareCalculationService] = None
    ):
        self.db = db
        self.itineraries = ItineraryStore(db)
        self.ledger = CapacityLedger(db)
        self.credentials = credential_generator or BoardingCredentialGenerator()
        self.fares = fare_service or FareCalculationService(db)
    
    def issue_ticket(self, pnr: str, employee_id: int) -> IssuedTicket:
        """Issue the ticket for PNR on behalf of an authenticated employee"""
        logger.info(f"Issuing ticket for {pnr} by employee {employee_id}")
        
        if self.db.in_transaction():
            # Issuance owns its transaction so the row locks are taken fresh
            logger.warning(
                f"Rolling back the open transaction on this session before issuing {pnr}; "
                f"uncommitted changes are discarded"
            )
            self.db.rollback()
        
        try:
            issued = self._issue(pnr, employee_id)
            self.db.commit()
        except TicketingError as e:
            self.db.rollback()
            logger.warning(f"Ticket issuance for {pnr} rejected: {e.message}")
            raise
        except OperationalError as e:
            self.db.rollback()
            logger.warning(f"Ticket issuance for {pnr} hit a lock conflict: {e.orig}")
            raise TicketingBusyError() from e
        except Exception:
            self.db.rollback()
            logger.exception(f"Ticket issuance for {pnr} failed")
            raise
        
        logger.info(
            f"Issued ticket {issued.ticket_id} for {pnr}: "
            f"credential={issued.boarding_credential} fare={issued.fare}"
        )
        return issued
    
    def _issue(self, pnr: str, employee_id: int) -> IssuedTicket:
        itinerary = self.itineraries.fetch_for_issuance(pnr)
        
        if itinerary.status != ItineraryStatus.CONFIRMED.value:
            raise InvalidItineraryStateError(itinerary.status)
        
        self.ledger.check_capacity(itinerary)
        
        fare = self.fares.quote_itinerary(itinerary)
        
        self.itineraries.transition(itinerary, ItineraryStatus.TICKET_ISSUED)
        
        ticket = self.credentials.insert_ticket(
            self.db, itinerary, employee_id, fare.total_fare
        )
        
        seats_reserved = self.itineraries.reserve_available_seats(itinerary)
        
        return IssuedTicket(
            ticket_id=ticket.id,
            pnr=itinerary.pnr,
            boarding_credential=ticket.boarding_credential,
            fare=fare.total_fare,
            issued_at=ticket.issued_at,
            issued_by_employee_id=employee_id,
            seats_reserved=seats_reserved,
        )
