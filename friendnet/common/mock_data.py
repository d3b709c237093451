# friendnet/common/mock_data.py
# 資料庫連不上時的替代資料，只有 MOCK_FALLBACK=true 才會用到

from datetime import datetime, timedelta, timezone
from typing import List

from friendnet.models.friend import FriendRead, FriendRequestRead
from friendnet.models.post import CommentRead, PostCounts, PostRead
from friendnet.models.user import DEFAULT_AVATAR, UserSummary

MOCK_USERS = [
    {"id": "user-2", "name": "Jane Smith", "username": "janesmith", "image": DEFAULT_AVATAR},
    {"id": "user-3", "name": "Alex Johnson", "username": "alexj", "image": DEFAULT_AVATAR},
    {"id": "user-4", "name": "Sarah Williams", "username": "sarahw", "image": DEFAULT_AVATAR},
    {"id": "user-5", "name": "David Brown", "username": "davidb", "image": DEFAULT_AVATAR},
]

MOCK_POSTS = [
    {
        "id": "1",
        "content": "Just set up my new project with FastAPI! #webdev",
        "hours_ago": 2,
        "user": MOCK_USERS[0],
        "likes": 12,
        "comments": 3,
    },
    {
        "id": "2",
        "content": "Learning about authentication today. OAuth integration is so powerful! #coding #auth",
        "hours_ago": 5,
        "user": MOCK_USERS[1],
        "likes": 8,
        "comments": 2,
    },
    {
        "id": "3",
        "content": "Just deployed my first app. The process was seamless! #deployment",
        "hours_ago": 10,
        "user": MOCK_USERS[0],
        "likes": 15,
        "comments": 5,
    },
]

MOCK_COMMENTS = [
    {"content": "This is a great post! Thanks for sharing.", "minutes_ago": 30, "user": MOCK_USERS[0]},
    {"content": "I learned a lot from this, keep it up!", "minutes_ago": 120, "user": MOCK_USERS[1]},
]


def _ago(**kwargs) -> datetime:
    return datetime.now(timezone.utc) - timedelta(**kwargs)


def _summary(user: dict) -> UserSummary:
    return UserSummary(id=user["id"], name=user["name"], image=user["image"])


def mock_friends() -> List[FriendRead]:
    return [
        FriendRead(id=f"friend-{i}", user_id=u["id"], name=u["name"], image=u["image"], username=u["username"])
        for i, u in enumerate(MOCK_USERS[:2], start=1)
    ]


def mock_friend_requests() -> List[FriendRequestRead]:
    # always addressed to whoever is asking
    return [
        FriendRequestRead(
            id=f"request-{i}",
            user_id=u["id"],
            name=u["name"],
            image=u["image"],
            username=u["username"],
            created_at=_ago(days=i),
        )
        for i, u in enumerate(MOCK_USERS[2:], start=1)
    ]


def mock_posts() -> List[PostRead]:
    return [
        PostRead(
            id=p["id"],
            content=p["content"],
            created_at=_ago(hours=p["hours_ago"]),
            user=_summary(p["user"]),
            count=PostCounts(likes=p["likes"], comments=p["comments"]),
            likes=[],
        )
        for p in MOCK_POSTS
    ]


def mock_comments(post_id: str) -> List[CommentRead]:
    return [
        CommentRead(
            id=f"comment-{post_id}-{i}",
            content=c["content"],
            created_at=_ago(minutes=c["minutes_ago"]),
            post_id=post_id,
            user=_summary(c["user"]),
        )
        for i, c in enumerate(MOCK_COMMENTS, start=1)
    ]
