from typing import Optional
from datetime import datetime
from uuid import UUID
from sqlmodel import SQLModel

from app.db.schema import EcoLetter


class SearchLogRead(SQLModel):
    id: UUID
    user_id: Optional[str] = None
    query: str
    product_id: Optional[UUID] = None
    searched_product_name: Optional[str] = None
    is_found: bool
    eco_score: Optional[float] = None
    eco_letter: Optional[EcoLetter] = None
    created_at: datetime


class SearchSummaryRead(SQLModel):
    user_id: Optional[str] = None
    total_searches: int
    found_searches: int
    average_eco_score: Optional[float] = None
