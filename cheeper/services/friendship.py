import logging
from typing import List

from sqlalchemy.orm import Session

from cheeper.repositories.friendship import FriendshipRepository
from cheeper.repositories.user import UserRepository
from cheeper.schemas.friendship import Friendship, FriendshipCreate
from cheeper.schemas.user import UserLookup
from cheeper.utils.exceptions import DuplicateFriendshipError, NotFoundError
from cheeper.utils.validation import validate_input

logger = logging.getLogger(__name__)


class FriendshipService:
    
    def __init__(self, db: Session):
        self.db = db
        self.repo = FriendshipRepository(db)
        self.user_repo = UserRepository(db)
    
    def add_friendship(self, user_login: str, friend_login: str) -> Friendship:
        """Record that user_login befriends friend_login (one direction only)"""
        data = validate_input(FriendshipCreate, user_login=user_login, friend_login=friend_login)

        user = self.user_repo.get_by_login(data.user_login)
        friend = self.user_repo.get_by_login(data.friend_login)

        if friend.id in self._friend_ids_or_empty(user.id):
            logger.info(f"Rejected duplicate friendship {data.user_login} -> {data.friend_login}")
            raise DuplicateFriendshipError(
                f"{data.user_login!r} is already friends with {data.friend_login!r}"
            )

        friendship = self.repo.create(user.id, friend.id)
        logger.info(f"Added friendship {data.user_login} -> {data.friend_login}")
        return Friendship.model_validate(friendship)
    
    def list_friend_names(self, user_login: str) -> List[str]:
        """Display names of the user's friends, sorted ascending"""
        lookup = validate_input(UserLookup, login=user_login)
        user = self.user_repo.get_by_login(lookup.login)
        friend_ids = self.repo.get_friend_ids(user.id)

        names = []
        for friend_id in friend_ids:
            friend = self.user_repo.get_by_id(friend_id)
            names.append(friend.name)
        return sorted(names)
    
    def count_friends(self, user_login: str) -> int:
        """Number of outgoing friendships of the user"""
        lookup = validate_input(UserLookup, login=user_login)
        user = self.user_repo.get_by_login(lookup.login)
        return self.repo.count_friends(user.id)

    def _friend_ids_or_empty(self, user_id: str):
        try:
            return self.repo.get_friend_ids(user_id)
        except NotFoundError:
            return set()
