"""Community impact statistics schema"""

from pydantic import BaseModel

class ImpactSummary(BaseModel):
    reports_submitted: int
    waste_collected: float
    hazardous_waste: float
    tokens_earned: int
    co2_offset: float
