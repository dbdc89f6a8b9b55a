import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./gym_admin.db")

    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Trash items are purged automatically after this many days
    TRASH_RETENTION_DAYS: int = int(os.getenv("TRASH_RETENTION_DAYS", "30"))

    # Plans created closer together than this are treated as double submissions
    DUPLICATE_PLAN_WINDOW_SECONDS: int = int(os.getenv("DUPLICATE_PLAN_WINDOW_SECONDS", "300"))


settings = Settings()
