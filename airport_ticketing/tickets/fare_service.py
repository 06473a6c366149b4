from typing import Dict, Iterable, Mapping, Optional, Union
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.orm import Session
from airport_ticketing.config import settings
from airport_ticketing.itineraries.schemas import ServiceType
from airport_ticketing.models import Itinerary, ServiceRate
from airport_ticketing.tickets.schemas import FareBreakdown

TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0')

def round2(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

class FareCalculator:
    """Side-effect free fare aggregation.
    
    Fare = sum of leg base fares
         + max(0, total baggage weight - allowance) * Extra Baggage rate
         + Upgraded Meal fees + Preferred Seat fees
    
    A service type without a catalog rate contributes nothing.
    """
    
    @staticmethod
    def calculate(
        leg_base_fares: Iterable[Decimal],
        baggage_weights: Iterable[Decimal],
        selected_services: Iterable[Union[ServiceType, str]],
        rates: Mapping[Union[ServiceType, str], Decimal],
        free_allowance_kg: Decimal = Decimal('20'),
    ) -> FareBreakdown:
        rate_table = {ServiceType(service_type): Decimal(fee) for service_type, fee in rates.items()}
        
        base_fare = sum((Decimal(fare) for fare in leg_base_fares), ZERO)
        
        total_weight = sum((Decimal(weight) for weight in baggage_weights), ZERO)
        excess_kg = max(ZERO, total_weight - Decimal(free_allowance_kg))
        baggage_fee = excess_kg * rate_table.get(ServiceType.EXTRA_BAGGAGE, ZERO)
        
        meal_fee = ZERO
        seat_fee = ZERO
        for service in selected_services:
            service_type = ServiceType(service)
            if service_type == ServiceType.UPGRADED_MEAL:
                meal_fee += rate_table.get(service_type, ZERO)
            elif service_type == ServiceType.PREFERRED_SEAT:
                seat_fee += rate_table.get(service_type, ZERO)
        
        return FareBreakdown(
            base_fare=round2(base_fare),
            excess_baggage_kg=excess_kg,
            baggage_fee=round2(baggage_fee),
            meal_fee=round2(meal_fee),
            seat_fee=round2(seat_fee),
            total_fare=round2(base_fare + baggage_fee + meal_fee + seat_fee),
        )

class FareCalculationService:
    """Gathers fare inputs for an itinerary and prices it with FareCalculator"""
    
    def __init__(self, db: Session, free_allowance_kg: Optional[Decimal] = None):
        self.db = db
        if free_allowance_kg is None:
            free_allowance_kg = Decimal(settings.FREE_BAGGAGE_ALLOWANCE_KG)
        self.free_allowance_kg = free_allowance_kg
    
    def load_rates(self) -> Dict[ServiceType, Decimal]:
        """Current service rate catalog"""
        return {
            ServiceType(rate.service_type): rate.service_fee
            for rate in self.db.query(ServiceRate).all()
        }
    
    def quote_itinerary(self, itinerary: Itinerary) -> FareBreakdown:
        """Price an itinerary from its segments, baggage and selected services"""
        return FareCalculator.calculate(
            leg_base_fares=[segment.flight.base_fare for segment in itinerary.segments],
            baggage_weights=[item.weight for item in itinerary.baggage],
            selected_services=[selected.service_rate.service_type for selected in itinerary.services],
            rates=self.load_rates(),
            free_allowance_kg=self.free_allowance_kg,
        )
