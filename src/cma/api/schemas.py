"""
Pydantic Schemas for API Request/Response Models

Request bodies wrap the engine's own models; responses reuse the result
models directly where they already fit.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.cma.models.criteria import SearchCriteria, SellerUpdateCriteria
from src.cma.models.property_record import PropertyRecord
from src.cma.models.results import MarketSummary, SellerUpdateMatch


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertySearchRequest(_ApiModel):
    """Criteria search body."""
    criteria: SearchCriteria = Field(default_factory=SearchCriteria)
    limit: Optional[int] = Field(None, ge=0)
    offset: int = Field(0, ge=0)


class PropertySearchResponse(_ApiModel):
    properties: List[PropertyRecord]
    count: int
    limit: int
    offset: int


class PropertyIdsRequest(_ApiModel):
    """Comparable set for statistics and timeline requests."""
    property_ids: List[str] = Field(..., min_length=1)
    exclude_rentals: bool = False


class SellerUpdateMatchRequest(_ApiModel):
    criteria: SellerUpdateCriteria
    since_date: Optional[datetime] = None
    result_limit: Optional[int] = Field(None, ge=0)


class SellerUpdateMatchResponse(_ApiModel):
    match: SellerUpdateMatch
    market_summary: Optional[MarketSummary] = None


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    database: str
    cache: str
    timestamp: datetime
