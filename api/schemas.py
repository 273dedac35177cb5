# ============================================================================
# API SCHEMAS
# ============================================================================
# STATUS: Core - Response schemas
# PURPOSE: Pydantic models for the JSON contract with the dashboard
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Schemas

Response models for the API. Keys are camelCase where the dashboard
expects them (totalReturns, byStatus, byPriority).

Request bodies are not modelled here: PATCH /returns must tell an absent
key from an explicit null, so it is parsed by core.models.update.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from core.models.query import ReturnsPage
from core.models.return_record import ReturnRecord


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class ReturnPatchExample(BaseModel):
    """Documentation-only shape of a PATCH /returns body."""
    ticket_link: str = Field(..., description="Row to update")
    status: Optional[str] = Field(None, description="Open, In Progress, Closed or Inprogress")
    om_update: Optional[str] = Field(None, description="null clears")
    designated_om_agent: Optional[str] = Field(None, description="blank clears")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "ticket_link": "https://support.example.com/tickets/48213",
                    "status": "In Progress",
                    "designated_om_agent": "Priya",
                }
            ]
        }
    }


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class StatsResponse(BaseModel):
    """Counts over the filtered set."""
    totalReturns: int = 0
    byStatus: Dict[str, int] = Field(default_factory=dict)
    byPriority: Dict[str, int] = Field(default_factory=dict)


class ReturnsListResponse(BaseModel):
    """GET /returns response."""
    rows: List[ReturnRecord] = Field(default_factory=list)
    total: int = 0
    stats: StatsResponse = Field(default_factory=StatsResponse)

    @classmethod
    def from_page(cls, page: ReturnsPage) -> "ReturnsListResponse":
        return cls(
            rows=page.rows,
            total=page.total,
            stats=StatsResponse(
                totalReturns=page.stats.total_returns,
                byStatus=page.stats.by_status,
                byPriority=page.stats.by_priority,
            ),
        )


class ReturnRowResponse(BaseModel):
    """PATCH /returns success response."""
    row: ReturnRecord


class FilterOptionsResponse(BaseModel):
    """GET /filters response."""
    priorities: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error response body."""
    error: str
