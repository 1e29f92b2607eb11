import pytest

from cheeper.repositories.friendship import FriendshipRepository
from cheeper.repositories.user import UserRepository
from cheeper.utils.exceptions import (
    DuplicateFriendshipError,
    NotFoundError,
    ValidationError,
)


def test_add_friendship(users, friendship_service, db):
    amy, zoe = users(("Amy", "amy"), ("Zoe", "zoe"))

    friendship = friendship_service.add_friendship("amy", "zoe")

    assert friendship.user_id == amy.id
    assert friendship.friend_id == zoe.id
    assert friendship.started_at is not None
    assert FriendshipRepository(db).get_friend_ids(amy.id) == {zoe.id}


def test_duplicate_friendship_rejected(users, friendship_service):
    users(("Amy", "amy"), ("Zoe", "zoe"))
    friendship_service.add_friendship("amy", "zoe")

    with pytest.raises(DuplicateFriendshipError):
        friendship_service.add_friendship("amy", "zoe")

    assert friendship_service.count_friends("amy") == 1


def test_friendship_is_directed(users, friendship_service):
    users(("Amy", "amy"), ("Zoe", "zoe"))
    friendship_service.add_friendship("amy", "zoe")
    friendship_service.add_friendship("zoe", "amy")

    assert friendship_service.list_friend_names("amy") == ["Zoe"]
    assert friendship_service.list_friend_names("zoe") == ["Amy"]


def test_store_rejects_duplicate_edge(users, db):
    amy, zoe = users(("Amy", "amy"), ("Zoe", "zoe"))
    repo = FriendshipRepository(db)
    repo.create(amy.id, zoe.id)

    # Bypasses the service pre-check, as a concurrent caller would
    with pytest.raises(DuplicateFriendshipError):
        repo.create(amy.id, zoe.id)
    assert repo.count_friends(amy.id) == 1


def test_friend_names_are_sorted(users, friendship_service):
    users(("Owner", "owner"), ("Zoe", "zoe"), ("Amy", "amy"), ("Mia", "mia"))
    for login in ("zoe", "amy", "mia"):
        friendship_service.add_friendship("owner", login)

    assert friendship_service.list_friend_names("owner") == ["Amy", "Mia", "Zoe"]


def test_count_friends(users, friendship_service):
    users(("Owner", "owner"), ("Zoe", "zoe"), ("Amy", "amy"), ("Mia", "mia"))
    for login in ("zoe", "amy", "mia"):
        friendship_service.add_friendship("owner", login)
    with pytest.raises(DuplicateFriendshipError):
        friendship_service.add_friendship("owner", "amy")

    assert friendship_service.count_friends("owner") == 3
    assert friendship_service.count_friends("zoe") == 0


def test_no_friends_is_not_found(users, friendship_service):
    users(("Amy", "amy"))
    with pytest.raises(NotFoundError):
        friendship_service.list_friend_names("amy")


@pytest.mark.parametrize("user_login,friend_login", [("amy", "ghost"), ("ghost", "amy")])
def test_unknown_login(users, friendship_service, db, user_login, friend_login):
    users(("Amy", "amy"))
    with pytest.raises(NotFoundError):
        friendship_service.add_friendship(user_login, friend_login)


def test_unknown_login_queries(friendship_service):
    with pytest.raises(NotFoundError):
        friendship_service.list_friend_names("ghost")
    with pytest.raises(NotFoundError):
        friendship_service.count_friends("ghost")


@pytest.mark.parametrize("user_login,friend_login", [("amy", "amy"), ("", "amy"), ("amy", " ")])
def test_invalid_logins(users, friendship_service, db, user_login, friend_login):
    amy, = users(("Amy", "amy"))
    with pytest.raises(ValidationError):
        friendship_service.add_friendship(user_login, friend_login)
    assert FriendshipRepository(db).count_friends(amy.id) == 0


def test_friend_of_friend_names_resolve(users, friendship_service, db):
    users(("Amy", "amy"), ("Zoe", "zoe"), ("Mia", "mia"))
    friendship_service.add_friendship("amy", "zoe")
    friendship_service.add_friendship("zoe", "mia")

    zoe = UserRepository(db).get_by_login("zoe")
    assert friendship_service.list_friend_names("amy") == [zoe.name]
    assert friendship_service.list_friend_names("zoe") == ["Mia"]


@pytest.mark.parametrize("missing_side", ["user", "friend"])
def test_edge_endpoints_must_exist(users, db, missing_side):
    amy, = users(("Amy", "amy"))
    repo = FriendshipRepository(db)
    ghost = "f" * 32
    user_id, friend_id = (ghost, amy.id) if missing_side == "user" else (amy.id, ghost)

    with pytest.raises(NotFoundError):
        repo.create(user_id, friend_id)
    assert repo.count_friends(user_id) == 0


def test_login_is_matched_exactly(users, friendship_service):
    users(("Amy", "amy"), ("Zoe", "zoe"))
    with pytest.raises(NotFoundError):
        friendship_service.add_friendship(" amy ", "zoe")
    with pytest.raises(NotFoundError):
        friendship_service.count_friends("amy ")


@pytest.mark.parametrize("login", ["", "   "])
def test_blank_login_in_queries(friendship_service, login):
    with pytest.raises(ValidationError):
        friendship_service.list_friend_names(login)
    with pytest.raises(ValidationError):
        friendship_service.count_friends(login)
