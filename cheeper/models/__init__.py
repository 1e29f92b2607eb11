from cheeper.models.user import User
from cheeper.models.message import Message
from cheeper.models.friendship import Friendship

__all__ = ["User", "Message", "Friendship"]
