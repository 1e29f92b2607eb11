from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime

from cheeper.schemas.user import not_blank


class MessageCreate(BaseModel):
    user_login: str
    text: str

    check_not_blank = field_validator("user_login", "text")(not_blank)


class Message(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    text: str
    created_at: datetime
    updated_at: datetime


class TimeWindow(BaseModel):
    """Inclusive [start, end] interval, both ends in UTC"""
    start: datetime
    end: datetime
