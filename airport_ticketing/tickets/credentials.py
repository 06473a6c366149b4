from datetime import datetime
from typing import Callable, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from airport_ticketing.config import settings
from airport_ticketing.exceptions import CredentialCollisionError
from airport_ticketing.logging_config import logger
from airport_ticketing.models import Itinerary, Ticket

Clock = Callable[[], datetime]

class BoardingCredentialGenerator:
    """Builds boarding credentials such as ``EB-202610171230-42``.
    
    Uniqueness comes from the itinerary id; the minute-resolution timestamp
    only makes the value readable. Attempt n > 0 appends ``-n``.
    """
    
    def __init__(
        self,
        clock: Optional[Clock] = None,
        prefix: Optional[str] = None,
        max_attempts: Optional[int] = None
    ):
        self.clock = clock or datetime.now
        self.prefix = prefix or settings.BOARDING_CREDENTIAL_PREFIX
        self.max_attempts = settings.CREDENTIAL_MAX_ATTEMPTS if max_attempts is None else max_attempts
    
    def generate(self, itinerary_id: int, issued_at: datetime, attempt: int = 0) -> str:
        credential = f"{self.prefix}-{issued_at:%Y%m%d%H%M}-{itinerary_id}"
        if attempt:
            credential = f"{credential}-{attempt}"
        return credential
    
    def insert_ticket(self, db: Session, itinerary: Itinerary, employee_id: int, fare) -> Ticket:
        """Insert the ticket, regenerating the credential on a uniqueness clash.
        
        Each attempt runs in a SAVEPOINT so a clash leaves the surrounding
        transaction usable. Integrity failures that are not credential clashes
        propagate unchanged.
        """
        issued_at = self.clock()
        
        for attempt in range(self.max_attempts):
            credential = self.generate(itinerary.id, issued_at, attempt)
            ticket = Ticket(
                itinerary_id=itinerary.id,
                boarding_credential=credential,
                issued_by_employee_id=employee_id,
                issued_at=issued_at,
                fare=fare,
            )
            try:
                with db.begin_nested():
                    db.add(ticket)
            except IntegrityError:
                if not self._credential_taken(db, credential):
                    raise
                logger.warning(
                    f"Boarding credential {credential} already exists, "
                    f"regenerating (attempt {attempt + 1}/{self.max_attempts})"
                )
                continue
            return ticket
        
        raise CredentialCollisionError(self.max_attempts)
    
    @staticmethod
    def _credential_taken(db: Session, credential: str) -> bool:
        return db.query(Ticket.id).filter(
            Ticket.boarding_credential == credential
        ).first() is not None
