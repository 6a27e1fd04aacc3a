"""
Scoring parameters
"""
from pydantic import BaseModel, Field


class ScoringParams(BaseModel):
    """Scoring parameters for an ICPC-style contest"""
    penalty_per_wrong: int = Field(20, ge=0)  # Penalty per rejection before first acceptance
    max_problems: int = Field(26, ge=1, le=26)  # Problem ids are letters A..Z
