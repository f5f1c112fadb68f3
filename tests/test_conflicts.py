"""
Unique and primary-key violations that slip past the existence checks
(two requests racing on the same row) surface as ConflictError.
"""
import pytest

from model.followers import Follower
from model.notification import Notification
from model.social.models import Post, PostLike
from model.user import Users
from schema.user import UserUpdateIn
from services import auth_service, post_service, user_service
from src.errors import ConflictError
from src.id_generator import generate_public_id
from src.route_helpers import commit_or_conflict


def _stale_reads(db_session, monkeypatch, entity):
    """Make the session blind to existing ``entity`` rows, as a racing request would be."""
    real_scalar = db_session.scalar
    real_get = db_session.get

    def scalar(stmt, *args, **kwargs):
        if stmt.column_descriptions[0]["entity"] is entity:
            return None
        return real_scalar(stmt, *args, **kwargs)

    def get(cls, *args, **kwargs):
        if cls is entity:
            return None
        return real_get(cls, *args, **kwargs)

    monkeypatch.setattr(db_session, "scalar", scalar)
    monkeypatch.setattr(db_session, "get", get)


@pytest.fixture
def alice(db_session):
    return auth_service.register(db_session, "alice", "alice@example.com", "secret1", "Alice")


@pytest.fixture
def bob(db_session):
    return auth_service.register(db_session, "bob", "bob@example.com", "secret1", "Bob")


# ===================================================================
# commit_or_conflict
# ===================================================================

class TestCommitOrConflict:

    def _duplicate_user(self, db_session, username, email):
        db_session.add(Users(user_id=generate_public_id("user"), username=username, email=email, full_name="Dup"))

    def test_duplicate_username(self, db_session, alice):
        self._duplicate_user(db_session, "alice", "other@example.com")
        with pytest.raises(ConflictError) as exc:
            commit_or_conflict(db_session)
        assert exc.value.message == "Username already exists"
        assert exc.value.code == "conflict"
        assert exc.value.status_code == 400

    def test_duplicate_email(self, db_session, alice):
        self._duplicate_user(db_session, "alice2", "alice@example.com")
        with pytest.raises(ConflictError) as exc:
            commit_or_conflict(db_session)
        assert exc.value.message == "Email already exists"

    def test_explicit_message_wins(self, db_session, alice, bob):
        db_session.add(Follower(follower_user_id=alice.id, following_user_id=bob.id))
        db_session.commit()
        db_session.add(Follower(follower_user_id=alice.id, following_user_id=bob.id))
        with pytest.raises(ConflictError) as exc:
            commit_or_conflict(db_session, "You are already following this user")
        assert exc.value.message == "You are already following this user"

    def test_session_usable_after_conflict(self, db_session, alice):
        self._duplicate_user(db_session, "alice", "other@example.com")
        with pytest.raises(ConflictError):
            commit_or_conflict(db_session)
        assert db_session.query(Users).count() == 1


# ===================================================================
# Racing service calls
# ===================================================================

class TestRacingWrites:

    def test_signup_race_on_username(self, db_session, monkeypatch, alice):
        _stale_reads(db_session, monkeypatch, Users)
        with pytest.raises(ConflictError) as exc:
            auth_service.register(db_session, "alice", "new@example.com", "secret1", "Alice Again")
        assert exc.value.message == "Username already exists"

    def test_signup_race_on_email(self, db_session, monkeypatch, alice):
        _stale_reads(db_session, monkeypatch, Users)
        with pytest.raises(ConflictError) as exc:
            auth_service.register(db_session, "alice2", "alice@example.com", "secret1", "Alice Again")
        assert exc.value.message == "Email already exists"

    def test_follow_race(self, db_session, monkeypatch, alice, bob):
        db_session.add(Follower(follower_user_id=alice.id, following_user_id=bob.id))
        db_session.commit()

        _stale_reads(db_session, monkeypatch, Follower)
        with pytest.raises(ConflictError) as exc:
            user_service.follow_unfollow(db_session, alice, bob.user_id)
        assert exc.value.message == "You are already following this user"

        # The notification staged with the edge was rolled back too
        assert db_session.query(Follower).count() == 1
        assert db_session.query(Notification).count() == 0

    def test_like_race(self, db_session, monkeypatch, alice, bob):
        post = post_service.create_post(db_session, alice, "race me", None, None)
        post_pk = db_session.query(Post.id).filter_by(post_id=post.id).scalar()

        like = PostLike(post_id=post_pk, user_id=bob.id)
        db_session.add(like)
        db_session.commit()
        db_session.expunge(like)

        _stale_reads(db_session, monkeypatch, PostLike)
        with pytest.raises(ConflictError) as exc:
            post_service.like_unlike(db_session, bob, post.id)
        assert exc.value.message == "Post already liked"

    def test_profile_update_race_on_username(self, db_session, monkeypatch, alice, bob):
        _stale_reads(db_session, monkeypatch, Users)
        with pytest.raises(ConflictError) as exc:
            user_service.update_profile(db_session, bob, UserUpdateIn(username="alice"), image_host=None)
        assert exc.value.message == "Username already exists"
