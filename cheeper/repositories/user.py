import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cheeper.core.database import store_operation, utcnow
from cheeper.models.user import User
from cheeper.utils.exceptions import DuplicateLoginError, NotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, login: str) -> User:
        """Create a new user, rejecting an already used login"""
        if self._login_exists(login):
            logger.info(f"Rejected duplicate login {login!r}")
            raise DuplicateLoginError(f"User with login {login!r} already exists")

        now = utcnow()
        db_user = User(
            name=name,
            login=login,
            created_at=now,
            updated_at=now
        )
        with store_operation(self.db, "create_user"):
            try:
                self.db.add(db_user)
                self.db.commit()
            except IntegrityError as e:
                # Lost the race against a concurrent insert of the same login
                self.db.rollback()
                if self._login_exists(login):
                    raise DuplicateLoginError(f"User with login {login!r} already exists") from e
                raise
        logger.debug(f"Created user {db_user.id} ({login})")
        return db_user

    def bulk_create(self, users: Sequence[User]) -> None:
        """Insert many users in one write"""
        with store_operation(self.db, "bulk_create_users"):
            try:
                self.db.add_all(users)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                taken = [u.login for u in users if self._login_exists(u.login)]
                if taken:
                    raise DuplicateLoginError(f"Batch contains existing logins: {taken}") from e
                raise

    def get_by_login(self, login: str) -> User:
        """Get user by login"""
        query = select(User).filter(User.login == login)
        with store_operation(self.db, "find_user_by_login"):
            user = self.db.execute(query).scalar_one_or_none()
        if user is None:
            raise NotFoundError(f"User with login {login!r} not found")
        return user

    def get_by_id(self, user_id: str) -> User:
        """Get user by ID"""
        with store_operation(self.db, "find_user_by_id"):
            user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id!r} not found")
        return user

    def count(self) -> int:
        with store_operation(self.db, "count_users"):
            return self.db.execute(select(func.count()).select_from(User)).scalar_one()

    def _login_exists(self, login: str) -> bool:
        query = select(User.id).filter(User.login == login).limit(1)
        with store_operation(self.db, "check_login"):
            return self.db.execute(query).first() is not None
