# friendnet/core/config.py

import logging
from typing import List, Optional

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "development-secret-do-not-use-in-production"


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./friendnet.db"

    # JWT session
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30 * 24 * 60  # 30 天

    # OAuth providers (只有 id 和 secret 都有設定時才啟用)
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None
    GITHUB_ID: Optional[str] = None
    GITHUB_SECRET: Optional[str] = None

    # 資料庫掛掉時是否回傳假資料
    MOCK_FALLBACK: bool = False

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        """
        告訴 Pydantic：.env 檔案就在「執行指令的那個資料夾」
        """
        env_file = ".env"

    def enabled_providers(self) -> List[str]:
        providers = ["credentials"]
        if self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET:
            providers.append("google")
        if self.GITHUB_ID and self.GITHUB_SECRET:
            providers.append("github")
        return providers

    def validate_env(self) -> List[str]:
        """
        Log configuration problems that don't stop the app from booting.
        Returns the warnings so callers (and tests) can inspect them.
        """
        problems = []
        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            problems.append("SECRET_KEY is not set, using the development default")
        if bool(self.GOOGLE_CLIENT_ID) != bool(self.GOOGLE_CLIENT_SECRET):
            problems.append(
                "Incomplete Google OAuth credentials. Both GOOGLE_CLIENT_ID and "
                "GOOGLE_CLIENT_SECRET must be provided."
            )
        if bool(self.GITHUB_ID) != bool(self.GITHUB_SECRET):
            problems.append(
                "Incomplete GitHub OAuth credentials. Both GITHUB_ID and "
                "GITHUB_SECRET must be provided."
            )
        for problem in problems:
            logger.warning(problem)
        return problems


# 建立一個全域實例
settings = Settings()
