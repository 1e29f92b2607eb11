import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cheeper.core.database import store_operation, utcnow
from cheeper.models.message import Message
from cheeper.models.user import User, new_id
from cheeper.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class MessageRepository:

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def build(user_id: str, text: str, timestamp: datetime) -> Message:
        """Construct a message without writing it"""
        return Message(
            id=new_id(),
            user_id=user_id,
            text=text,
            created_at=timestamp,
            updated_at=timestamp
        )

    def save(self, message: Message) -> None:
        """Persist a message built by build()"""
        with store_operation(self.db, "save_message"):
            try:
                self.db.add(message)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if self.db.get(User, message.user_id) is None:
                    raise NotFoundError(f"Owner {message.user_id!r} of message {message.id} not found")
                raise

    def create(self, user_id: str, text: str, timestamp: Optional[datetime] = None) -> Message:
        """Create a new message"""
        message = self.build(user_id, text, timestamp or utcnow())
        self.save(message)
        logger.debug(f"Saved message {message.id} for user {user_id}")
        return message

    def bulk_create(self, messages: Sequence[Message]) -> None:
        with store_operation(self.db, "bulk_create_messages"):
            self.db.add_all(messages)
            self.db.commit()

    def get_by_id(self, message_id: str) -> Message:
        """Get message by ID"""
        with store_operation(self.db, "find_message_by_id"):
            message = self.db.get(Message, message_id)
        if message is None:
            raise NotFoundError(f"Message with ID {message_id!r} not found")
        return message

    def fetch_raw(self, message_id: str) -> None:
        """Point lookup whose row is discarded undecoded"""
        stmt = select(Message.__table__).where(Message.__table__.c.id == message_id)
        with store_operation(self.db, "fetch_message"):
            self.db.execute(stmt).first()

    def first_for_user(self, user_id: str) -> Message:
        stmt = select(Message).where(Message.user_id == user_id).limit(1)
        with store_operation(self.db, "find_user_message"):
            message = self.db.execute(stmt).scalar_one_or_none()
        if message is None:
            raise NotFoundError(f"User {user_id!r} has no messages")
        return message

    def find_in_range(self, user_id: str, start: datetime, end: datetime) -> List[Message]:
        """Messages of one user created within [start, end], in store order"""
        stmt = select(Message).where(
            and_(
                Message.user_id == user_id,
                Message.created_at >= start,
                Message.created_at <= end
            )
        )
        with store_operation(self.db, "find_messages_in_range"):
            messages = list(self.db.execute(stmt).scalars().all())
        if not messages:
            raise NotFoundError(
                f"No messages for user {user_id!r} between {start.isoformat()} and {end.isoformat()}"
            )
        return messages
