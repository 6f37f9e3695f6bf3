"""
User record Pydantic models
"""

from pydantic import BaseModel, Field

# Range of the table's integer id column
ID_MIN = -2**31
ID_MAX = 2**31 - 1


class UserRecordCreateRequest(BaseModel):
    id: int = Field(..., ge=ID_MIN, le=ID_MAX)
    name: str = Field(..., max_length=255)


class UserRecordUpdateRequest(BaseModel):
    name: str = Field(..., max_length=255)


class UserRecordResponse(BaseModel):
    id: int
    name: str


class AffectedRowsResponse(BaseModel):
    """Outcome of an update or delete; affected is 0 when the id did not exist"""
    id: int
    affected: int
