"""
Admin CMS endpoints: dashboard, property management and user roles.
Property screens are open to admins and realtors; user management to admins only.
"""

from fastapi import APIRouter, Depends, status, Response
from typing import List
import uuid
from stayhub.models.profile import Profile
from stayhub.services.currency import CurrencyConverter, get_currency_converter
from stayhub.services.property import PropertyService
from stayhub.services.user import UserService
from stayhub.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    AvailabilityUpdate,
    PropertyResponse,
    AdminPropertyRow,
    DashboardResponse
)
from stayhub.schemas.user import UserResponse, UserListResponse, RoleUpdateRequest
from stayhub.schemas.error import COMMON_ERROR_RESPONSES
from stayhub.utils.dependencies import (
    get_current_staff_user,
    get_current_admin_user,
    get_property_service,
    get_user_service
)


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    responses={401: COMMON_ERROR_RESPONSES[401], 403: COMMON_ERROR_RESPONSES[403]}
)


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Dashboard counts",
    description="Total, long-term, short-stay and available property counts"
)
async def dashboard(
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service)
) -> DashboardResponse:
    return DashboardResponse(**await property_service.dashboard_counts())


@router.get(
    "/properties",
    response_model=List[AdminPropertyRow],
    status_code=status.HTTP_200_OK,
    summary="All properties",
    description="Every property, newest first, with its primary image"
)
async def list_properties(
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> List[AdminPropertyRow]:
    properties = await property_service.list_all()
    return [property_service.serialize_row(property_obj, converter) for property_obj in properties]


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing; the first image becomes primary when none is marked",
    responses={422: COMMON_ERROR_RESPONSES[422]}
)
async def create_property(
    property_data: PropertyCreate,
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data, current_user)
    return property_service.serialize(property_obj, converter)


@router.get(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Load property for editing",
    responses={404: COMMON_ERROR_RESPONSES[404]}
)
async def get_property(
    property_id: uuid.UUID,
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return property_service.serialize(property_obj, converter)


@router.put(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Update fields; an images list replaces the whole gallery",
    responses={404: COMMON_ERROR_RESPONSES[404], 422: COMMON_ERROR_RESPONSES[422]}
)
async def update_property(
    property_id: uuid.UUID,
    property_data: PropertyUpdate,
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, property_data, current_user)
    return property_service.serialize(property_obj, converter)


@router.delete(
    "/properties/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    responses={404: COMMON_ERROR_RESPONSES[404]}
)
async def delete_property(
    property_id: uuid.UUID,
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service)
) -> Response:
    await property_service.delete_property(property_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/properties/{property_id}/availability",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle availability",
    responses={404: COMMON_ERROR_RESPONSES[404]}
)
async def set_availability(
    property_id: uuid.UUID,
    payload: AvailabilityUpdate,
    current_user: Profile = Depends(get_current_staff_user),
    property_service: PropertyService = Depends(get_property_service),
    converter: CurrencyConverter = Depends(get_currency_converter)
) -> PropertyResponse:
    property_obj = await property_service.set_availability(property_id, payload.is_available, current_user)
    return property_service.serialize(property_obj, converter)


@router.get(
    "/users",
    response_model=UserListResponse,
    status_code=status.HTTP_200_OK,
    summary="All users",
    description="Accounts newest first with their role tags"
)
async def list_users(
    current_user: Profile = Depends(get_current_admin_user),
    user_service: UserService = Depends(get_user_service)
) -> UserListResponse:
    users = await user_service.list_users(current_user)
    return UserListResponse(
        users=[UserResponse.model_validate(user.to_dict()) for user in users],
        total=len(users)
    )


@router.put(
    "/users/{user_id}/role",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Change user role",
    description="Set admin, realtor, user or none; admins cannot change their own role",
    responses={404: COMMON_ERROR_RESPONSES[404]}
)
async def update_user_role(
    user_id: uuid.UUID,
    payload: RoleUpdateRequest,
    current_user: Profile = Depends(get_current_admin_user),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    updated = await user_service.set_role(user_id, payload.role, current_user)
    return UserResponse.model_validate(updated.to_dict())
