import pytest
from conftest import auth_headers
from sqlalchemy.exc import IntegrityError

from friendnet.models.friend import Friend, FriendRequest


def send(client, sender, receiver_id):
    return client.post("/api/friends/send", json={"userId": receiver_id}, headers=auth_headers(sender))


def test_requires_session(client):
    for method, url in [
        ("get", "/api/friends"),
        ("get", "/api/friends/requests"),
        ("post", "/api/friends/send"),
        ("post", "/api/friends/accept"),
        ("post", "/api/friends/reject"),
    ]:
        response = getattr(client, method)(url)
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


def test_invalid_token_is_rejected(client):
    response = client.get("/api/friends", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_send_friend_request(client, db, alice, bob):
    response = send(client, alice, bob.id)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "pending"
    assert body["data"]["created"]

    req = db.query(FriendRequest).one()
    assert (req.sender_id, req.receiver_id, req.status) == (alice.id, bob.id, "pending")


def test_send_requires_user_id(client, alice):
    response = client.post("/api/friends/send", json={}, headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["error"] == "User ID is required"


def test_cannot_send_to_yourself(client, alice):
    response = send(client, alice, alice.id)
    assert response.status_code == 400
    assert response.json()["error"] == "Cannot send friend request to yourself"


def test_send_to_unknown_user(client, alice):
    response = send(client, alice, "no-such-user")
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


def test_duplicate_request_in_either_direction(client, alice, bob):
    assert send(client, alice, bob.id).status_code == 200

    again = send(client, alice, bob.id)
    assert again.status_code == 400
    assert again.json()["error"] == "A friend request already exists"

    reverse = send(client, bob, alice.id)
    assert reverse.status_code == 400
    assert reverse.json()["error"] == "A friend request already exists"


def test_already_friends(client, db, alice, bob):
    db.add_all([Friend(user_id=alice.id, friend_id=bob.id), Friend(user_id=bob.id, friend_id=alice.id)])
    db.commit()

    response = send(client, alice, bob.id)
    assert response.status_code == 400
    assert response.json()["error"] == "Already friends"


def test_pending_requests_listed_for_receiver(client, alice, bob, carol):
    send(client, alice, carol.id)
    send(client, bob, carol.id)

    response = client.get("/api/friends/requests", headers=auth_headers(carol))
    assert response.status_code == 200
    requests = response.json()
    assert [r["userId"] for r in requests] == [bob.id, alice.id]
    assert requests[0]["name"] == "Bob Brown"
    assert requests[0]["image"] == "/default-avatar.jpg"
    assert requests[0]["username"] == "bobb"
    assert "createdAt" in requests[0]

    # the sender sees nothing
    assert client.get("/api/friends/requests", headers=auth_headers(alice)).json() == []


def test_accept_creates_friendship_both_ways(client, db, alice, bob):
    request_id = send(client, alice, bob.id).json()["data"]["id"]

    response = client.post("/api/friends/accept", json={"requestId": request_id}, headers=auth_headers(bob))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["requestId"] == request_id
    assert data["friendshipId"]

    db.expire_all()
    assert db.get(FriendRequest, request_id).status == "accepted"
    assert db.query(Friend).count() == 2

    alice_friends = client.get("/api/friends", headers=auth_headers(alice)).json()
    bob_friends = client.get("/api/friends", headers=auth_headers(bob)).json()
    assert [f["userId"] for f in alice_friends] == [bob.id]
    assert [f["userId"] for f in bob_friends] == [alice.id]
    assert bob_friends[0]["name"] == "Alice Anders"
    assert bob_friends[0]["username"] == "alice"

    # no longer pending
    assert client.get("/api/friends/requests", headers=auth_headers(bob)).json() == []


def test_only_receiver_can_accept(client, alice, bob):
    request_id = send(client, alice, bob.id).json()["data"]["id"]

    response = client.post("/api/friends/accept", json={"requestId": request_id}, headers=auth_headers(alice))
    assert response.status_code == 404
    assert response.json()["error"] == "Friend request not found"


def test_accept_twice_is_not_found(client, alice, bob):
    request_id = send(client, alice, bob.id).json()["data"]["id"]
    headers = auth_headers(bob)

    assert client.post("/api/friends/accept", json={"requestId": request_id}, headers=headers).status_code == 200
    second = client.post("/api/friends/accept", json={"requestId": request_id}, headers=headers)
    assert second.status_code == 404


def test_accept_requires_request_id(client, alice):
    response = client.post("/api/friends/accept", json={}, headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["error"] == "Request ID is required"


def test_reject(client, db, alice, bob):
    request_id = send(client, alice, bob.id).json()["data"]["id"]

    response = client.post("/api/friends/reject", json={"requestId": request_id}, headers=auth_headers(bob))
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"requestId": request_id, "status": "rejected"}}

    db.expire_all()
    assert db.get(FriendRequest, request_id).status == "rejected"
    assert db.query(Friend).count() == 0
    assert client.get("/api/friends", headers=auth_headers(bob)).json() == []


def test_rejected_request_still_blocks_a_new_one(client, alice, bob):
    request_id = send(client, alice, bob.id).json()["data"]["id"]
    client.post("/api/friends/reject", json={"requestId": request_id}, headers=auth_headers(bob))

    response = send(client, bob, alice.id)
    assert response.status_code == 400
    assert response.json()["error"] == "A friend request already exists"


def test_reject_unknown_request(client, bob):
    response = client.post("/api/friends/reject", json={"requestId": "missing"}, headers=auth_headers(bob))
    assert response.status_code == 404


def test_send_without_body_reports_missing_user_id(client, alice):
    response = client.post("/api/friends/send", headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["error"] == "User ID is required"


@pytest.mark.parametrize("action", ["accept", "reject"])
def test_respond_without_body_reports_missing_request_id(client, alice, action):
    response = client.post(f"/api/friends/{action}", headers=auth_headers(alice))
    assert response.status_code == 400
    assert response.json()["error"] == "Request ID is required"


def test_reverse_request_rejected_by_database(db, alice, bob):
    db.add(FriendRequest(sender_id=alice.id, receiver_id=bob.id))
    db.commit()

    db.add(FriendRequest(sender_id=bob.id, receiver_id=alice.id))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert db.query(FriendRequest).count() == 1


def test_accept_when_friendship_already_stored(client, db, alice, bob):
    request_id = send(client, alice, bob.id).json()["data"]["id"]
    db.add(Friend(user_id=bob.id, friend_id=alice.id))
    db.commit()

    response = client.post("/api/friends/accept", json={"requestId": request_id}, headers=auth_headers(bob))
    assert response.status_code == 400
    assert response.json()["error"] == "Already friends"

    db.expire_all()
    assert db.get(FriendRequest, request_id).status == "pending"
