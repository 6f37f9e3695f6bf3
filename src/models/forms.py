"""
Form endpoint models
"""

from pydantic import BaseModel


class FormAcknowledgement(BaseModel):
    res: int = 1
    status: int = 200
