from types import SimpleNamespace

import pytest
from conftest import auth_headers, make_user

from friendnet.models.friend import Friend, FriendRequest
from friendnet.models.post import Post
from friendnet.services.friend_service import resolve_relationship_status


def friendship(a, b):
    return SimpleNamespace(user_id=a, friend_id=b)


def request(sender, receiver, status="pending"):
    return SimpleNamespace(sender_id=sender, receiver_id=receiver, status=status)


@pytest.mark.parametrize(
    "friendships, requests, expected",
    [
        ([], [], "none"),
        ([friendship("me", "them")], [], "friends"),
        ([friendship("them", "me")], [request("me", "them", "accepted")], "friends"),
        ([], [request("me", "them")], "sent"),
        ([], [request("them", "me")], "received"),
        ([], [request("them", "me", "rejected")], "rejected"),
        ([], [request("me", "someone-else")], "none"),
    ],
)
def test_resolve_relationship_status(friendships, requests, expected):
    assert resolve_relationship_status("me", "them", friendships, requests) == expected


def test_search_requires_session(client):
    assert client.get("/api/users/search", params={"q": "al"}).status_code == 401


@pytest.mark.parametrize("q", [None, "", "a"])
def test_search_query_too_short(client, alice, q):
    params = {"q": q} if q is not None else {}
    response = client.get("/api/users/search", params=params, headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["error"] == "Search query must be at least 2 characters"


def test_search_matches_name_username_and_email_prefix(client, db, alice, bob, carol):
    make_user(db, "Someone Else", username="zed", email="bobcat@example.com")

    results = client.get("/api/users/search", params={"q": "BOB"}, headers=auth_headers(alice)).json()
    assert sorted(r["username"] for r in results) == ["bobb", "zed"]

    # email only matches as a prefix
    assert client.get("/api/users/search", params={"q": "example"}, headers=auth_headers(alice)).json() == []


def test_search_excludes_caller(client, alice):
    results = client.get("/api/users/search", params={"q": "alice"}, headers=auth_headers(alice)).json()
    assert results == []


def test_search_reports_relationship_status(client, db, alice, bob, carol):
    dave = make_user(db, "Carl Dunn", username="dave", email="dave@example.com")
    erin = make_user(db, "Carla Eve", username="erin", email="erin@example.com")
    db.add_all([
        Friend(user_id=alice.id, friend_id=carol.id),
        Friend(user_id=carol.id, friend_id=alice.id),
        FriendRequest(sender_id=alice.id, receiver_id=dave.id, status="pending"),
        FriendRequest(sender_id=erin.id, receiver_id=alice.id, status="pending"),
    ])
    db.commit()

    results = client.get("/api/users/search", params={"q": "car"}, headers=auth_headers(alice)).json()
    statuses = {r["username"]: r["status"] for r in results}
    assert statuses == {"carolc": "friends", "dave": "sent", "erin": "received"}

    results = client.get("/api/users/search", params={"q": "bob"}, headers=auth_headers(alice)).json()
    assert results[0]["status"] == "none"
    assert results[0]["email"] == "bob@example.com"


def test_read_profile(client, db, alice, bob):
    db.add_all([
        Post(user_id=alice.id, content="one"),
        Post(user_id=alice.id, content="two"),
        Friend(user_id=alice.id, friend_id=bob.id),
        Friend(user_id=bob.id, friend_id=alice.id),
    ])
    db.commit()

    response = client.get(f"/api/users/{alice.id}")
    assert response.status_code == 200
    profile = response.json()
    assert profile["username"] == "alice"
    assert profile["_count"] == {"posts": 2, "friends": 1}
    assert "email" not in profile


def test_read_missing_profile(client):
    response = client.get("/api/users/nobody")
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


def test_update_me(client, alice):
    response = client.patch("/api/users/me", json={"bio": "Welcome to my profile!"}, headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json()["bio"] == "Welcome to my profile!"
    assert response.json()["name"] == "Alice Anders"


def test_update_me_taken_username(client, alice, bob):
    response = client.patch("/api/users/me", json={"username": "bobb"}, headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["error"] == "Username already taken"


def test_update_me_requires_session(client):
    assert client.patch("/api/users/me", json={"bio": "hi"}).status_code == 401
