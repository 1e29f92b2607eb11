from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Index

from cheeper.core.database import Base, UTCDateTime, utcnow
from cheeper.models.user import new_id


class Friendship(Base):
    __tablename__ = "friendships"

    id = Column(String(32), primary_key=True, default=new_id)
    # Directed edge: user_id -> friend_id
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    friend_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    started_at = Column(UTCDateTime, nullable=False, default=utcnow)

    # Timestamps
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow)

    # Constraints
    __table_args__ = (
        UniqueConstraint('user_id', 'friend_id', name='unique_friendship'),
        Index('idx_friendship_user', 'user_id'),
    )
