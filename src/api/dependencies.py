"""
Request dependencies resolving the record store owned by the application
"""

from fastapi import Request

from database.record_store import RecordStore
from services.auth_service import AuthService
from services.users_service import UsersService


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_users_service(request: Request) -> UsersService:
    return UsersService(get_record_store(request))


def get_auth_service(request: Request) -> AuthService:
    return AuthService(request.app.state.account_store)
