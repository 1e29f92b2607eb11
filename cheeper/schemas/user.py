from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime


def not_blank(v: str) -> str:
    """Reject empty or whitespace-only values; logins are matched exactly"""
    if not v.strip():
        raise ValueError("must not be empty")
    return v


class UserCreate(BaseModel):
    name: str
    login: str

    check_not_blank = field_validator("name", "login")(not_blank)


class UserLookup(BaseModel):
    login: str

    check_not_blank = field_validator("login")(not_blank)


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    login: str
    created_at: datetime
    updated_at: datetime
