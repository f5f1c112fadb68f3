"""
Profiles, follow graph, suggestions and profile updates.
"""
from src.errors import InternalError


def _me(c):
    return c.get("/api/auth/me").json()


# ===================================================================
# Profiles
# ===================================================================

def test_profile_by_username(signed_up):
    alice, _ = signed_up("alice")
    signed_up("bob", full_name="Bob B")

    resp = alice.get("/api/users/profile/bob")
    assert resp.status_code == 200
    body = resp.json()
    assert body["fullName"] == "Bob B"
    assert "password" not in body


def test_profile_unknown_username(signed_up):
    alice, _ = signed_up("alice")
    resp = alice.get("/api/users/profile/nobody")
    assert resp.status_code == 404


# ===================================================================
# Follow graph
# ===================================================================

class TestFollow:

    def test_follow_then_unfollow_is_symmetric(self, signed_up):
        alice, a = signed_up("alice")
        bob, b = signed_up("bob")

        resp = alice.post(f"/api/users/follow/{b['id']}")
        assert resp.status_code == 200
        assert resp.json()["message"] == "Followed successfully"
        assert b["id"] in _me(alice)["following"]
        assert a["id"] in _me(bob)["followers"]

        resp = alice.post(f"/api/users/follow/{b['id']}")
        assert resp.json()["message"] == "Unfollowed successfully"
        assert b["id"] not in _me(alice)["following"]
        assert a["id"] not in _me(bob)["followers"]

    def test_follow_creates_notification_unfollow_does_not(self, signed_up):
        alice, a = signed_up("alice")
        bob, b = signed_up("bob")

        alice.post(f"/api/users/follow/{b['id']}")
        alice.post(f"/api/users/follow/{b['id']}")

        notes = bob.get("/api/notifications").json()
        assert len(notes) == 1
        assert notes[0]["type"] == "follow"
        assert notes[0]["from"]["id"] == a["id"]
        assert notes[0]["from"]["username"] == "alice"

    def test_self_follow_rejected(self, signed_up):
        alice, a = signed_up("alice")
        resp = alice.post(f"/api/users/follow/{a['id']}")
        assert resp.status_code == 400
        assert resp.json()["message"] == "You cannot follow/unfollow yourself"
        assert _me(alice)["following"] == []

    def test_follow_unknown_user(self, signed_up):
        alice, _ = signed_up("alice")
        resp = alice.post("/api/users/follow/USR-1700000000-NOBODY")
        assert resp.status_code == 404

    def test_follow_malformed_or_wrong_kind_of_id(self, signed_up):
        alice, _ = signed_up("alice")
        post = alice.post("/api/posts/create", json={"text": "hi"}).json()["data"]
        for target in ("not-an-id", "usr-1700000000-abcdef", post["id"]):
            resp = alice.post(f"/api/users/follow/{target}")
            assert resp.status_code == 404
            assert resp.json()["message"] == "User not found"


# ===================================================================
# Suggestions
# ===================================================================

class TestSuggested:

    def test_excludes_self_and_followed_and_caps_at_four(self, signed_up):
        alice, a = signed_up("alice")
        others = [signed_up(f"user{i}")[1] for i in range(6)]
        followed = others[0]
        alice.post(f"/api/users/follow/{followed['id']}")

        resp = alice.get("/api/users/suggested")
        assert resp.status_code == 200
        ids = [u["id"] for u in resp.json()]
        assert len(ids) <= 4
        assert a["id"] not in ids
        assert followed["id"] not in ids
        assert len(set(ids)) == len(ids)
        assert all("password" not in u for u in resp.json())

    def test_empty_when_alone(self, signed_up):
        alice, _ = signed_up("alice")
        assert alice.get("/api/users/suggested").json() == []


# ===================================================================
# Profile updates
# ===================================================================

class TestUpdateProfile:

    def test_partial_update_keeps_other_fields(self, signed_up):
        alice, _ = signed_up("alice", full_name="Alice A")
        resp = alice.post("/api/users/update", json={"bio": "hello", "link": "https://a.example"})
        assert resp.status_code == 200
        assert resp.json()["message"] == "Profile updated successfully"
        user = resp.json()["user"]
        assert user["bio"] == "hello"
        assert user["link"] == "https://a.example"
        assert user["fullName"] == "Alice A"
        assert user["username"] == "alice"

    def test_username_taken_by_other(self, signed_up):
        alice, _ = signed_up("alice")
        signed_up("bob")
        resp = alice.post("/api/users/update", json={"username": "bob"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Username already exists"

    def test_email_taken_by_other(self, signed_up):
        alice, _ = signed_up("alice")
        signed_up("bob", email="bob@x.com")
        resp = alice.post("/api/users/update", json={"email": "bob@x.com"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Email already exists"

    def test_keeping_own_username_is_fine(self, signed_up):
        alice, _ = signed_up("alice")
        resp = alice.post("/api/users/update", json={"username": "alice", "fullName": "Alice Z"})
        assert resp.status_code == 200
        assert resp.json()["user"]["fullName"] == "Alice Z"

    def test_password_change_requires_both(self, signed_up):
        alice, _ = signed_up("alice")
        for payload in ({"currentPassword": "secret1"}, {"newPassword": "secret2"}):
            resp = alice.post("/api/users/update", json=payload)
            assert resp.status_code == 400
            assert resp.json()["message"] == "Please provide both current and new password"

    def test_password_change_wrong_current(self, signed_up):
        alice, _ = signed_up("alice")
        resp = alice.post("/api/users/update", json={"currentPassword": "nope123", "newPassword": "secret2"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Current password is incorrect"

    def test_password_change_too_short(self, signed_up):
        alice, _ = signed_up("alice")
        resp = alice.post("/api/users/update", json={"currentPassword": "secret1", "newPassword": "short"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Password must be at least 6 characters long"

    def test_password_change_then_login(self, signed_up, new_client):
        alice, _ = signed_up("alice")
        resp = alice.post("/api/users/update", json={"currentPassword": "secret1", "newPassword": "secret2"})
        assert resp.status_code == 200

        old = new_client().post("/api/auth/login", json={"username": "alice", "password": "secret1"})
        new = new_client().post("/api/auth/login", json={"username": "alice", "password": "secret2"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_picture_replacement_destroys_previous_asset(self, signed_up, image_host, png_payload):
        alice, _ = signed_up("alice")

        first = alice.post("/api/users/update", json={"profilePicture": png_payload}).json()["user"]
        assert first["profilePicture"] == image_host.uploads[0]
        assert image_host.destroyed == []

        second = alice.post("/api/users/update", json={"profilePicture": png_payload}).json()["user"]
        assert second["profilePicture"] == image_host.uploads[1]
        assert image_host.destroyed == [image_host.uploads[0]]

    def test_cover_picture_stores_uploaded_url(self, signed_up, image_host, png_payload):
        alice, _ = signed_up("alice")
        user = alice.post("/api/users/update", json={"coverPicture": png_payload}).json()["user"]
        assert user["coverPicture"] == image_host.uploads[0]
        assert user["profilePicture"] == ""

    def test_invalid_picture_keeps_previous_asset(self, signed_up, image_host, png_payload):
        alice, _ = signed_up("alice")
        stored = alice.post("/api/users/update", json={"profilePicture": png_payload}).json()["user"]["profilePicture"]

        resp = alice.post("/api/users/update", json={"profilePicture": "data:image/png;base64,@@@"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid image payload"
        assert image_host.destroyed == []
        assert _me(alice)["profilePicture"] == stored

    def test_failed_upload_keeps_previous_asset(self, signed_up, image_host, png_payload):
        alice, _ = signed_up("alice")
        alice.post("/api/users/update", json={"profilePicture": png_payload})

        def _broken_upload(payload):
            raise InternalError("Image upload failed")

        image_host.upload = _broken_upload
        resp = alice.post("/api/users/update", json={"profilePicture": png_payload})
        assert resp.status_code == 500
        assert image_host.destroyed == []

    def test_hosted_url_replaces_picture_without_upload(self, signed_up, image_host, png_payload):
        alice, _ = signed_up("alice")
        first = alice.post("/api/users/update", json={"profilePicture": png_payload}).json()["user"]

        user = alice.post("/api/users/update", json={"profilePicture": "https://cdn.example.com/me.png"}).json()["user"]
        assert user["profilePicture"] == "https://cdn.example.com/me.png"
        assert image_host.uploads == [first["profilePicture"]]
        assert image_host.destroyed == [first["profilePicture"]]
