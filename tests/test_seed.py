import pytest
from sqlalchemy import select

from cheeper.models import Friendship, Message, User
from cheeper.services.seed import SeedService
from cheeper.services.friendship import FriendshipService
from cheeper.utils.exceptions import DuplicateLoginError, ValidationError


def test_generate_test_data(db, rng):
    summary = SeedService(db, rng=rng).generate_test_data(5)

    assert (summary.users, summary.friendships, summary.messages) == (5, 5, 10)

    users = db.execute(select(User)).scalars().all()
    assert sorted(u.login for u in users) == [f"login_{i}" for i in range(5)]
    assert all(u.name == u.login.replace("login_", "user_") for u in users)
    assert len({u.created_at for u in users}) == 1


def test_each_user_has_one_outgoing_edge_to_someone_else(db, rng):
    SeedService(db, rng=rng).generate_test_data(4)
    friendships = db.execute(select(Friendship)).scalars().all()

    assert sorted(f.user_id for f in friendships) == sorted(
        db.execute(select(User.id)).scalars().all()
    )
    assert all(f.user_id != f.friend_id for f in friendships)
    service = FriendshipService(db)
    assert [service.count_friends(f"login_{i}") for i in range(4)] == [1, 1, 1, 1]


def test_messages_belong_to_generated_users(db, rng):
    SeedService(db, rng=rng).generate_test_data(3)
    user_ids = set(db.execute(select(User.id)).scalars().all())
    messages = db.execute(select(Message)).scalars().all()

    assert len(messages) == 10
    assert {m.user_id for m in messages} <= user_ids


def test_two_users_befriend_each_other(db, rng):
    SeedService(db, rng=rng).generate_test_data(2)
    service = FriendshipService(db)
    assert service.list_friend_names("login_0") == ["user_1"]
    assert service.list_friend_names("login_1") == ["user_0"]


@pytest.mark.parametrize("num_users", [0, 1, -3, "5"])
def test_invalid_user_count(db, num_users):
    with pytest.raises(ValidationError):
        SeedService(db).generate_test_data(num_users)


def test_second_batch_collides_on_logins(db, rng):
    service = SeedService(db, rng=rng)
    service.generate_test_data(2)
    with pytest.raises(DuplicateLoginError):
        service.generate_test_data(2)
