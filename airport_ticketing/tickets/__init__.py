"""
Ticket Issuance Module

Turns a confirmed itinerary into an issued ticket in one transaction:
seat capacity admission, fare aggregation, status transition, boarding
credential creation and seat reservation commit together or not at all.

Key Components:
- issuance_service.py: TicketIssuanceService, the single issuance entrypoint
- capacity.py: CapacityLedger, per-flight issued seat counts under row locks
- fare_service.py: FareCalculator (pure) and FareCalculationService (loader)
- credentials.py: BoardingCredentialGenerator with an injectable clock
- reporting.py: read-only ticket details projection
- router.py: FastAPI endpoints
- schemas.py: Pydantic request/response models
"""
