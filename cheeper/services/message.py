import logging
from typing import List

from sqlalchemy.orm import Session

from cheeper.repositories.message import MessageRepository
from cheeper.repositories.user import UserRepository
from cheeper.schemas.message import Message, MessageCreate
from cheeper.schemas.user import User, UserCreate, UserLookup
from cheeper.utils.timewindow import parse_window
from cheeper.utils.validation import validate_input

logger = logging.getLogger(__name__)


class MessageService:

    def __init__(self, db: Session):
        self.db = db
        self.repo = MessageRepository(db)
        self.user_repo = UserRepository(db)

    def create_user(self, name: str, login: str) -> User:
        """Create a user from raw caller arguments"""
        data = validate_input(UserCreate, name=name, login=login)
        user = self.user_repo.create(data.name, data.login)
        logger.info(f"Created user {data.login}")
        return User.model_validate(user)

    def post_message(self, user_login: str, text: str) -> Message:
        """Post a message as the user with this login, timestamped now"""
        data = validate_input(MessageCreate, user_login=user_login, text=text)
        user = self.user_repo.get_by_login(data.user_login)
        message = self.repo.create(user.id, data.text)
        logger.info(f"User {data.user_login} posted message {message.id}")
        return Message.model_validate(message)

    def get_message(self, message_id: str) -> Message:
        return Message.model_validate(self.repo.get_by_id(message_id))

    def get_messages_in_window(self, user_login: str, start_str: str, end_str: str) -> List[Message]:
        """Messages of the user created between two "HH:MM DD-MM-YYYY" times, inclusive"""
        lookup = validate_input(UserLookup, login=user_login)
        window = parse_window(start_str, end_str)
        user = self.user_repo.get_by_login(lookup.login)
        messages = self.repo.find_in_range(user.id, window.start, window.end)
        return [Message.model_validate(m) for m in messages]
