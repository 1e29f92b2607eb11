from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from datetime import datetime

from cheeper.schemas.user import not_blank


class FriendshipCreate(BaseModel):
    user_login: str
    friend_login: str

    check_not_blank = field_validator("user_login", "friend_login")(not_blank)

    @model_validator(mode="after")
    def distinct_logins(self) -> "FriendshipCreate":
        if self.user_login == self.friend_login:
            raise ValueError("user and friend logins must be different")
        return self


class Friendship(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    friend_id: str
    started_at: datetime
    created_at: datetime
    updated_at: datetime
