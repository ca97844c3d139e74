"""
Visit scheduling endpoints. All of them require authentication.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from realestate_api.config import Settings
from realestate_api.services.access_policy import Identity
from realestate_api.services.visit import VisitService
from realestate_api.schemas.common import SuccessListResponse, SuccessResponse
from realestate_api.schemas.visit import VisitCreate, VisitUpdate, VisitResponse
from realestate_api.schemas.error import COMMON_ERROR_RESPONSES, NOT_FOUND_RESPONSE, UNAUTHORIZED_RESPONSE
from realestate_api.utils.dependencies import get_app_settings, get_current_identity, get_visit_service
from realestate_api.utils.pagination import resolve_page


router = APIRouter(prefix="/visits", tags=["Visits"])


@router.get(
    "",
    response_model=SuccessListResponse[VisitResponse],
    summary="List visits",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE}
)
async def list_visits(
    limite: Optional[int] = Query(None, description="Page size (defaults to 10)"),
    pagina: Optional[int] = Query(None, description="Page number, starting at 1"),
    caller: Identity = Depends(get_current_identity),
    settings: Settings = Depends(get_app_settings),
    visit_service: VisitService = Depends(get_visit_service)
):
    page = resolve_page(limite, pagina, default_limit=settings.default_page_size)
    visits = await visit_service.list_visits(page, caller)
    return SuccessListResponse[VisitResponse](
        data=[VisitResponse.model_validate(visit.to_dict()) for visit in visits]
    )


@router.get(
    "/{visit_id}",
    response_model=SuccessResponse[VisitResponse],
    summary="Get visit",
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def get_visit(
    visit_id: str,
    caller: Identity = Depends(get_current_identity),
    visit_service: VisitService = Depends(get_visit_service)
):
    visit = await visit_service.get_visit(visit_id, caller)
    return SuccessResponse[VisitResponse](data=VisitResponse.model_validate(visit.to_dict()))


@router.post(
    "",
    response_model=SuccessResponse[VisitResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Schedule visit",
    description="Schedule a visit to an existing listing. The date defaults to now.",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE}
)
async def create_visit(
    visit_data: VisitCreate,
    caller: Identity = Depends(get_current_identity),
    visit_service: VisitService = Depends(get_visit_service)
):
    visit = await visit_service.create_visit(visit_data, caller)
    return SuccessResponse[VisitResponse](data=VisitResponse.model_validate(visit.to_dict()))


@router.put(
    "/{visit_id}",
    response_model=SuccessResponse[VisitResponse],
    summary="Update visit",
    responses={**COMMON_ERROR_RESPONSES, **UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def update_visit(
    visit_id: str,
    visit_data: VisitUpdate,
    caller: Identity = Depends(get_current_identity),
    visit_service: VisitService = Depends(get_visit_service)
):
    visit = await visit_service.update_visit(visit_id, visit_data, caller)
    return SuccessResponse[VisitResponse](data=VisitResponse.model_validate(visit.to_dict()))


@router.delete(
    "/{visit_id}",
    response_model=SuccessResponse[VisitResponse],
    summary="Delete visit",
    responses={**UNAUTHORIZED_RESPONSE, **NOT_FOUND_RESPONSE}
)
async def delete_visit(
    visit_id: str,
    caller: Identity = Depends(get_current_identity),
    visit_service: VisitService = Depends(get_visit_service)
):
    visit = await visit_service.delete_visit(visit_id, caller)
    return SuccessResponse[VisitResponse](data=VisitResponse.model_validate(visit.to_dict()))
