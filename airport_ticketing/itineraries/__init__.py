"""
Itinerary Store

Holds itineraries with their segments, ancillary services and baggage, and
owns the itinerary status state machine.

Key Components:
- service.py: ItineraryStore (locked fetch for issuance, transitions, seat flips)
- router.py: read-only FastAPI endpoints for itineraries and fare quotes
- schemas.py: status enumerations and Pydantic response models
"""
