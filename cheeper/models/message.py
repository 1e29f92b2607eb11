from sqlalchemy import Column, String, Text, ForeignKey, Index

from cheeper.core.database import Base, UTCDateTime, utcnow
from cheeper.models.user import new_id


class Message(Base):
    __tablename__ = "messages"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow)

    # Indexes for range queries
    __table_args__ = (
        Index('idx_message_user_created', 'user_id', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"Message(id={self.id!r}, user_id={self.user_id!r}, created_at={self.created_at!r})"
