# ============================================================================
# API ROUTES
# ============================================================================
# STATUS: Core - FastAPI route definitions
# PURPOSE: HTTP endpoints for listing, exporting, and updating returns
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Routes

Endpoints:
- GET   /filters         - Distinct priorities and statuses for dropdowns
- GET   /returns         - Filtered, sorted, paginated rows + total + stats
- GET   /returns/export  - Same listing rendered as a CSV attachment
- PATCH /returns         - Partial update of one row by ticket_link

Every error body is {"error": "<message>"}:
    400 invalid input, 404 no such ticket_link, 503 DATABASE_URL unset,
    500 query failure.
"""

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from core.errors import ConfigurationError, InvalidRequestError, ReturnsError
from core.models.query import ReturnsQuery
from core.models.update import ReturnUpdate
from services.csv_export import export_filename, rows_to_csv
from services.returns_service import ReturnsService
from .schemas import (
    ErrorResponse,
    FilterOptionsResponse,
    ReturnPatchExample,
    ReturnRowResponse,
    ReturnsListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_MESSAGE = "No row found for this ticket_link"

_ERROR_RESPONSES = {
    500: {"model": ErrorResponse, "description": "Query failed"},
    503: {"model": ErrorResponse, "description": "DATABASE_URL is not configured"},
}


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# main.py stores the service on app.state at startup; it stays None when
# DATABASE_URL is unset.

def get_returns_service(request: Request) -> ReturnsService:
    service = getattr(request.app.state, "returns_service", None)
    if service is None:
        raise ConfigurationError("DATABASE_URL is not configured")
    return service


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _returns_error_handler(request: Request, exc: ReturnsError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message)


def register_error_handlers(app: FastAPI) -> None:
    """Map ReturnsError subclasses onto {"error": ...} responses."""
    app.add_exception_handler(ReturnsError, _returns_error_handler)


# ============================================================================
# FILTER OPTIONS
# ============================================================================

@router.get(
    "/filters",
    response_model=FilterOptionsResponse,
    tags=["Returns"],
    responses=_ERROR_RESPONSES,
)
async def get_filters(service: ReturnsService = Depends(get_returns_service)):
    """
    Distinct non-empty priority and status values across the whole table.
    """
    options = await service.get_filter_options()
    return FilterOptionsResponse(**options)


# ============================================================================
# LISTING
# ============================================================================

@router.get(
    "/returns",
    response_model=ReturnsListResponse,
    tags=["Returns"],
    responses={400: {"model": ErrorResponse, "description": "Invalid date filter"}, **_ERROR_RESPONSES},
)
async def list_returns(request: Request, service: ReturnsService = Depends(get_returns_service)):
    """
    List returns.

    Query parameters (all optional): page, limit, dateFrom, dateTo,
    priority, status, customer, sku, sortBy, sortOrder.

    Unknown sortBy falls back to request_date; any sortOrder other than
    "asc" sorts descending. limit is clamped to 10..200.
    """
    query = ReturnsQuery.from_params(request.query_params)
    page = await service.list_returns(query)
    return ReturnsListResponse.from_page(page)


@router.get(
    "/returns/export",
    tags=["Returns"],
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}, **_ERROR_RESPONSES},
)
async def export_returns(request: Request, service: ReturnsService = Depends(get_returns_service)):
    """
    Download the requested page of returns as CSV.

    Accepts the same query parameters as GET /returns.
    """
    query = ReturnsQuery.from_params(request.query_params)
    page = await service.list_returns(query)

    return Response(
        content=rows_to_csv(page.rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


# ============================================================================
# UPDATE
# ============================================================================

@router.patch(
    "/returns",
    response_model=ReturnRowResponse,
    tags=["Returns"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "No row for ticket_link"},
        **_ERROR_RESPONSES,
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ReturnPatchExample.model_json_schema()}},
        }
    },
)
async def update_return(request: Request, service: ReturnsService = Depends(get_returns_service)):
    """
    Update status, om_update and/or designated_om_agent on one row.

    Keys absent from the body are left untouched; last_follow_up is always
    stamped with the current server time.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestError("Invalid JSON body")

    update = ReturnUpdate.from_payload(payload)
    record = await service.update_return(update)

    if record is None:
        return error_response(404, NOT_FOUND_MESSAGE)

    return ReturnRowResponse(row=record)
