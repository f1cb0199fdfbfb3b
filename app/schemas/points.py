from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List
from datetime import datetime


class PointsTransactionResponse(BaseModel):
    activity_type: str
    points: int
    description: str
    details: Optional[dict] = Field(default=None, serialization_alias="metadata")
    created_at: datetime

    class Config:
        from_attributes = True


class PointsLedgerResponse(BaseModel):
    id: Optional[UUID] = None  # None until the first points are recorded
    user_id: UUID
    total_points: int = 0
    monthly_points: int = 0
    transactions: List[PointsTransactionResponse] = []
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
