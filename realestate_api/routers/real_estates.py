"""
Real estate listing endpoints: paginated list, search, and admin-only writes.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from realestate_api.config import Settings
from realestate_api.repositories.real_estate import RealEstateSearchFilters
from realestate_api.services.access_policy import Identity
from realestate_api.services.real_estate import RealEstateService
from realestate_api.schemas.common import SuccessListResponse, SuccessResponse
from realestate_api.schemas.real_estate import (
    RealEstateCreate,
    RealEstateUpdate,
    RealEstateResponse,
    RealEstateSearchResponse,
)
from realestate_api.schemas.error import AUTH_ERROR_RESPONSES, COMMON_ERROR_RESPONSES, NOT_FOUND_RESPONSE
from realestate_api.utils.dependencies import (
    get_app_settings,
    get_current_identity,
    get_optional_identity,
    get_real_estate_service,
)
from realestate_api.utils.pagination import resolve_page


router = APIRouter(prefix="/realEstate", tags=["Real Estate"])


@router.get(
    "",
    response_model=SuccessListResponse[RealEstateResponse],
    summary="List listings",
    description="Paginated listings in creation order.",
    responses={**COMMON_ERROR_RESPONSES, **AUTH_ERROR_RESPONSES}
)
async def list_real_estates(
    limite: Optional[int] = Query(None, description="Page size (defaults to 10)"),
    pagina: Optional[int] = Query(None, description="Page number, starting at 1"),
    caller: Optional[Identity] = Depends(get_optional_identity),
    settings: Settings = Depends(get_app_settings),
    real_estate_service: RealEstateService = Depends(get_real_estate_service)
):
    page = resolve_page(limite, pagina, default_limit=settings.default_page_size)
    real_estates = await real_estate_service.list_real_estates(page, caller)
    return SuccessListResponse[RealEstateResponse](
        data=[RealEstateResponse.model_validate(real_estate.to_dict()) for real_estate in real_estates]
    )


# Registered before /{real_estate_id} so "search" is not taken for an id
@router.get(
    "/search",
    response_model=RealEstateSearchResponse,
    summary="Search listings",
    description="Every listing matching all given filters. Omitted filters are ignored.",
    responses={**COMMON_ERROR_RESPONSES, **AUTH_ERROR_RESPONSES}
)
async def search_real_estates(
    price_min: Optional[float] = Query(None, alias="priceMin", description="Minimum price (inclusive)"),
    price_max: Optional[float] = Query(None, alias="priceMax", description="Maximum price (inclusive)"),
    area_min: Optional[float] = Query(None, alias="areaMin", description="Minimum area (inclusive)"),
    area_max: Optional[float] = Query(None, alias="areaMax", description="Maximum area (inclusive)"),
    location: Optional[str] = Query(None, description="Case-insensitive substring of the location"),
    bedrooms: Optional[int] = Query(None, description="Exact number of bedrooms"),
    caller: Optional[Identity] = Depends(get_optional_identity),
    real_estate_service: RealEstateService = Depends(get_real_estate_service)
) -> RealEstateSearchResponse:
    filters = RealEstateSearchFilters(
        price_min=price_min,
        price_max=price_max,
        area_min=area_min,
        area_max=area_max,
        location=location,
        bedrooms=bedrooms
    )
    results = await real_estate_service.search(filters, caller)
    return RealEstateSearchResponse(
        results=[RealEstateResponse.model_validate(real_estate.to_dict()) for real_estate in results]
    )


@router.get(
    "/{real_estate_id}",
    response_model=SuccessResponse[RealEstateResponse],
    summary="Get listing",
    responses={**AUTH_ERROR_RESPONSES, **NOT_FOUND_RESPONSE}
)
async def get_real_estate(
    real_estate_id: str,
    caller: Optional[Identity] = Depends(get_optional_identity),
    real_estate_service: RealEstateService = Depends(get_real_estate_service)
):
    real_estate = await real_estate_service.get_real_estate(real_estate_id, caller)
    return SuccessResponse[RealEstateResponse](data=RealEstateResponse.model_validate(real_estate.to_dict()))


@router.post(
    "",
    response_model=SuccessResponse[RealEstateResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    description="Create a listing. Requires an administrator token.",
    responses={**COMMON_ERROR_RESPONSES, **AUTH_ERROR_RESPONSES}
)
async def create_real_estate(
    real_estate_data: RealEstateCreate,
    caller: Identity = Depends(get_current_identity),
    real_estate_service: RealEstateService = Depends(get_real_estate_service)
):
    real_estate = await real_estate_service.create_real_estate(real_estate_data, caller)
    return SuccessResponse[RealEstateResponse](data=RealEstateResponse.model_validate(real_estate.to_dict()))


@router.put(
    "/{real_estate_id}",
    response_model=SuccessResponse[RealEstateResponse],
    summary="Update listing",
    description="Partially update a listing. Requires an administrator token.",
    responses={**COMMON_ERROR_RESPONSES, **AUTH_ERROR_RESPONSES, **NOT_FOUND_RESPONSE}
)
async def update_real_estate(
    real_estate_id: str,
    real_estate_data: RealEstateUpdate,
    caller: Identity = Depends(get_current_identity),
    real_estate_service: RealEstateService = Depends(get_real_estate_service)
):
    real_estate = await real_estate_service.update_real_estate(real_estate_id, real_estate_data, caller)
    return SuccessResponse[RealEstateResponse](data=RealEstateResponse.model_validate(real_estate.to_dict()))


@router.delete(
    "/{real_estate_id}",
    response_model=SuccessResponse[RealEstateResponse],
    summary="Delete listing",
    description="Delete a listing and its visits. Requires an administrator token. Returns the deleted listing.",
    responses={**AUTH_ERROR_RESPONSES, **NOT_FOUND_RESPONSE}
)
async def delete_real_estate(
    real_estate_id: str,
    caller: Identity = Depends(get_current_identity),
    real_estate_service: RealEstateService = Depends(get_real_estate_service)
):
    real_estate = await real_estate_service.delete_real_estate(real_estate_id, caller)
    return SuccessResponse[RealEstateResponse](data=RealEstateResponse.model_validate(real_estate.to_dict()))
