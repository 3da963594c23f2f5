"""HTTP routes: catalog JSON, health check, and the HTML page."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from api_reference.catalog.base import ApiCategory
from api_reference.server.page import render_page
from api_reference.service import CatalogService
from api_reference.view.state import ViewState

VERSION = "1.0.0"

api_router = APIRouter(prefix="/api", tags=["Categories"])
router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    categories: int
    endpoints: int
    version: str


def get_service(request: Request) -> CatalogService:
    return request.app.state.service


@api_router.get(
    "/categories",
    response_model=list[ApiCategory],
    response_model_exclude_none=True,
)
async def list_categories(service: CatalogService = Depends(get_service)):
    """All categories with their endpoints."""
    return service.list_categories()


@api_router.get(
    "/categories/{category_id}",
    response_model=ApiCategory,
    response_model_exclude_none=True,
    responses={404: {"description": "Category not found"}},
)
async def get_category(category_id: str, service: CatalogService = Depends(get_service)):
    """One category by id. Unknown ids answer 404 via CategoryNotFoundError."""
    return service.get_category(category_id)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health(service: CatalogService = Depends(get_service)):
    return HealthResponse(
        status="healthy",
        categories=len(service.list_categories()),
        endpoints=service.endpoint_count(),
        version=VERSION,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(
    q: str = "",
    expanded: list[str] = Query(default=[]),
    category: str | None = None,
    service: CatalogService = Depends(get_service),
):
    """The searchable reference page. All view state travels in the query string."""
    state = ViewState(search_query=q, expanded=set(expanded), active_category=category)
    return HTMLResponse(render_page(service.info, service.list_categories(), state))
