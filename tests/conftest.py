import random

import pytest

from cheeper.core.database import Store
from cheeper.services.friendship import FriendshipService
from cheeper.services.message import MessageService


@pytest.fixture
def store():
    store = Store.connect("sqlite://", echo=False)
    yield store
    store.dispose()


@pytest.fixture
def db(store):
    with store.session() as session:
        yield session


@pytest.fixture
def message_service(db):
    return MessageService(db)


@pytest.fixture
def friendship_service(db):
    return FriendshipService(db)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def users(message_service):
    """Create users from (name, login) pairs"""
    def _create(*pairs):
        return [message_service.create_user(name, login) for name, login in pairs]
    return _create
