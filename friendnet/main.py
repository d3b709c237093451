# friendnet/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from friendnet.core.config import settings
from friendnet.core.errors import register_exception_handlers
from friendnet.core.logging import setup_logging

# 強制引用所有 Model，讓 SQLAlchemy 知道要建表
from friendnet.db.session import engine
from friendnet.models.base import Base
from friendnet.models.user import User, Account  # noqa: F401
from friendnet.models.post import Post, Comment, Like  # noqa: F401
from friendnet.models.friend import Friend, FriendRequest  # noqa: F401

# 引入所有路由
from friendnet.routers import auth, friends, posts, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_env()
    # 啟動時自動檢查並建立缺少的表格
    Base.metadata.create_all(bind=engine)
    logger.info("friendnet API started")
    yield


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="friendnet", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # 註冊路由
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(friends.router, prefix="/api/friends", tags=["friends"])
    app.include_router(posts.router, prefix="/api/posts", tags=["posts"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])

    @app.get("/")
    def read_root():
        return {"message": "friendnet API is running!"}

    return app


app = create_app()
