"""
User records API routes
"""

import logging
from typing import List
from fastapi import HTTPException, Depends, Path

from api.dependencies import get_users_service
from api.routing import Route
from models.user_record import (
    UserRecordCreateRequest,
    UserRecordUpdateRequest,
    UserRecordResponse,
    AffectedRowsResponse,
    ID_MIN,
    ID_MAX,
)
from services.base_service import ServiceResult, CONFLICT_ERROR, DATABASE_UNAVAILABLE
from services.users_service import UsersService

logger = logging.getLogger(__name__)


def raise_for_failure(result: ServiceResult) -> None:
    """Map a failed ServiceResult to the matching HTTP error"""
    if result.success:
        return
    if result.error_type == CONFLICT_ERROR:
        raise HTTPException(status_code=409, detail=result.error)
    elif result.error_type == DATABASE_UNAVAILABLE:
        raise HTTPException(status_code=503, detail=result.error)
    else:
        raise HTTPException(status_code=500, detail=result.error)


async def create_user(
    request: UserRecordCreateRequest,
    service: UsersService = Depends(get_users_service)
) -> UserRecordResponse:
    """Create a new user record"""
    result = await service.create_user(request.id, request.name)
    raise_for_failure(result)

    record = result.data[0]
    return UserRecordResponse(id=record["id"], name=record["name"])


async def list_users(
    service: UsersService = Depends(get_users_service)
) -> List[UserRecordResponse]:
    """List every user record in storage order"""
    result = await service.list_users()
    raise_for_failure(result)

    return [UserRecordResponse(id=record["id"], name=record["name"]) for record in result.data]


async def update_user(
    request: UserRecordUpdateRequest,
    user_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    service: UsersService = Depends(get_users_service)
) -> AffectedRowsResponse:
    """Rename a user record; affected is 0 when the id does not exist"""
    result = await service.rename_user(user_id, request.name)
    raise_for_failure(result)

    return AffectedRowsResponse(id=user_id, affected=result.count)


async def delete_user(
    user_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    service: UsersService = Depends(get_users_service)
) -> AffectedRowsResponse:
    """Delete a user record; affected is 0 when the id does not exist"""
    result = await service.delete_user(user_id)
    raise_for_failure(result)

    return AffectedRowsResponse(id=user_id, affected=result.count)


ROUTES = [
    Route("", ["POST"], create_user, {"response_model": UserRecordResponse, "status_code": 201}),
    Route("", ["GET"], list_users, {"response_model": List[UserRecordResponse]}),
    Route("/{user_id}", ["PUT"], update_user, {"response_model": AffectedRowsResponse}),
    Route("/{user_id}", ["DELETE"], delete_user, {"response_model": AffectedRowsResponse}),
]
