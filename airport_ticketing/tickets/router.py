from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from airport_ticketing.auth.dependencies import get_current_employee_id
from airport_ticketing.database import get_db
from airport_ticketing.tickets.capacity import CapacityLedger
from airport_ticketing.tickets.issuance_service import TicketIssuanceService
from airport_ticketing.tickets.reporting import TicketReportService
from airport_ticketing.tickets.schemas import (
    IssueTicketRequest, IssuedTicket, TicketDetailList, FlightAvailability
)

router = APIRouter()

@router.post("/issue", response_model=IssuedTicket, status_code=status.HTTP_201_CREATED)
def issue_ticket(
    request: IssueTicketRequest,
    employee_id: int = Depends(get_current_employee_id),
    db: Session = Depends(get_db)
):
    """Issue the ticket for a confirmed itinerary"""
    issuance_service = TicketIssuanceService(db)
    return issuance_service.issue_ticket(request.pnr, employee_id)

@router.get("/details", response_model=TicketDetailList)
def get_ticket_details(
    pnr: Optional[str] = Query(None, description="Filter by PNR"),
    employee_id: Optional[int] = Query(None, description="Filter by issuing employee"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """Ticket details, one row per flight leg"""
    details = TicketReportService.get_ticket_details(
        db, pnr=pnr, employee_id=employee_id, skip=skip, limit=limit
    )
    return TicketDetailList(tickets=details, total=len(details))

@router.get("/flights/{flight_id}/availability", response_model=FlightAvailability)
def get_flight_availability(
    flight_id: int,
    db: Session = Depends(get_db)
):
    """Issued and remaining seats on a flight"""
    availability = CapacityLedger(db).availability(flight_id)
    
    if not availability:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Flight not found"
        )
    
    return availability
