import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from cheeper.core.config import settings
from cheeper.core.database import utcnow
from cheeper.models.friendship import Friendship
from cheeper.models.message import Message
from cheeper.models.user import User, new_id
from cheeper.repositories.friendship import FriendshipRepository
from cheeper.repositories.message import MessageRepository
from cheeper.repositories.user import UserRepository
from cheeper.schemas.benchmark import SeedSummary
from cheeper.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


class SeedService:
    """Fills the store with synthetic users, friendships and messages"""

    def __init__(self, db: Session, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()
        self.user_repo = UserRepository(db)
        self.message_repo = MessageRepository(db)
        self.friendship_repo = FriendshipRepository(db)

    def generate_test_data(self, num_users: int) -> SeedSummary:
        """Insert num_users users, one random outgoing friendship per user and
        a fixed batch of messages spread over random users.

        Every record of the batch shares one timestamp and each entity type
        goes to the store in a single bulk write.
        """
        if isinstance(num_users, bool) or not isinstance(num_users, int) or num_users < 2:
            raise ValidationError(f"The number of users must be an integer >= 2, got {num_users!r}")

        now = utcnow()
        user_ids = [new_id() for _ in range(num_users)]

        users = self._create_users(user_ids, now)
        self.user_repo.bulk_create(users)

        friendships = self._create_friendships(user_ids, now)
        self.friendship_repo.bulk_create(friendships)

        messages = self._create_messages(user_ids, now)
        self.message_repo.bulk_create(messages)

        logger.info(
            f"Generated {len(users)} users, {len(friendships)} friendships, {len(messages)} messages"
        )
        return SeedSummary(users=len(users), friendships=len(friendships), messages=len(messages))

    def _create_users(self, user_ids: List[str], now) -> List[User]:
        return [
            User(
                id=user_id,
                name=f"user_{i}",
                login=f"login_{i}",
                created_at=now,
                updated_at=now
            )
            for i, user_id in enumerate(user_ids)
        ]

    def _create_friendships(self, user_ids: List[str], now) -> List[Friendship]:
        friendships = []
        num_users = len(user_ids)
        for i, user_id in enumerate(user_ids):
            friend_index = self.rng.randrange(num_users)
            while friend_index == i:
                friend_index = self.rng.randrange(num_users)
            friendships.append(
                Friendship(
                    id=new_id(),
                    user_id=user_id,
                    friend_id=user_ids[friend_index],
                    started_at=now,
                    created_at=now,
                    updated_at=now
                )
            )
        return friendships

    def _create_messages(self, user_ids: List[str], now) -> List[Message]:
        messages = []
        for i in range(settings.TEST_MESSAGES_PER_BATCH):
            user_index = self.rng.randrange(len(user_ids))
            messages.append(
                self.message_repo.build(
                    user_ids[user_index],
                    f"message number {i} for user_{user_index}",
                    now
                )
            )
        return messages
