"""
Login API route
"""

import logging
from fastapi import HTTPException, Depends

from api.dependencies import get_auth_service
from api.routes.users import raise_for_failure
from api.routing import Route
from models.auth import LoginRequest, LoginResponse
from services.auth_service import AuthService

logger = logging.getLogger(__name__)


async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """Check a username/password pair against the accounts table"""
    result = await service.check_login(request.username, request.password)
    raise_for_failure(result)

    if not result.data[0]["authenticated"]:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return LoginResponse(username=request.username, authenticated=True)


ROUTES = [
    Route("/login", ["POST"], login, {"response_model": LoginResponse}),
]
