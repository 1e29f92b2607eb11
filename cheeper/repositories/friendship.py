import logging
from datetime import datetime
from typing import Optional, Sequence, Set

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cheeper.core.database import store_operation, utcnow
from cheeper.models.friendship import Friendship
from cheeper.models.user import User
from cheeper.utils.exceptions import DuplicateFriendshipError, NotFoundError

logger = logging.getLogger(__name__)


class FriendshipRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def create(self, user_id: str, friend_id: str, started_at: Optional[datetime] = None) -> Friendship:
        """Create the directed edge user_id -> friend_id"""
        now = utcnow()
        friendship = Friendship(
            user_id=user_id,
            friend_id=friend_id,
            started_at=started_at or now,
            created_at=now,
            updated_at=now
        )
        with store_operation(self.db, "create_friendship"):
            try:
                self.db.add(friendship)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                self._explain_rejected_edge(user_id, friend_id)
                raise
        return friendship
    
    def bulk_create(self, friendships: Sequence[Friendship]) -> None:
        with store_operation(self.db, "bulk_create_friendships"):
            self.db.add_all(friendships)
            self.db.commit()
    
    def get_friend_ids(self, user_id: str) -> Set[str]:
        """Targets of the user's outgoing edges; NotFoundError when there are none"""
        stmt = select(Friendship.friend_id).where(Friendship.user_id == user_id)
        with store_operation(self.db, "find_friend_ids"):
            ids = set(self.db.execute(stmt).scalars().all())
        if not ids:
            raise NotFoundError(f"User {user_id!r} has no friends")
        return ids
    
    def count_friends(self, user_id: str) -> int:
        """Number of outgoing edges, counted by the store"""
        stmt = select(func.count()).select_from(Friendship).where(Friendship.user_id == user_id)
        with store_operation(self.db, "count_friends"):
            return self.db.execute(stmt).scalar_one()

    def _explain_rejected_edge(self, user_id: str, friend_id: str) -> None:
        """Raise the typed error behind a constraint violation, if there is one"""
        stmt = select(User.id).where(User.id.in_([user_id, friend_id]))
        found = set(self.db.execute(stmt).scalars().all())
        for missing in (user_id, friend_id):
            if missing not in found:
                raise NotFoundError(f"User with ID {missing!r} not found")

        stmt = select(Friendship.id).where(
            and_(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
        ).limit(1)
        if self.db.execute(stmt).first() is not None:
            raise DuplicateFriendshipError(f"Friendship {user_id} -> {friend_id} already exists")
