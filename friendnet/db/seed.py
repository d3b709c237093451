# friendnet/db/seed.py
# python -m friendnet.db.seed

import logging

from friendnet.core.logging import setup_logging
from friendnet.core.security import get_password_hash
from friendnet.db.session import SessionLocal, engine
from friendnet.models.base import Base
from friendnet.models.friend import Friend, FriendRequest  # noqa: F401
from friendnet.models.post import Post
from friendnet.models.user import User

logger = logging.getLogger(__name__)

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "password123"

SEED_POSTS = [
    {"content": "Hello world! This is my first post.", "image": "https://via.placeholder.com/500x300"},
    {"content": "I love building with FastAPI and SQLAlchemy!"},
]


def seed(db) -> User:
    """Create the test user and its posts; running it twice changes nothing."""
    user = db.query(User).filter(User.email == TEST_EMAIL).first()
    if user is not None:
        logger.info("Seed user already exists: %s", user.id)
        return user

    user = User(
        email=TEST_EMAIL,
        name="Test User",
        username="testuser",
        image="https://via.placeholder.com/150",
        hashed_password=get_password_hash(TEST_PASSWORD),
    )
    user.posts = [Post(**data) for data in SEED_POSTS]
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Seeded user %s with %d posts", user.id, len(SEED_POSTS))
    return user


def main():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
