import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 数据库配置
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "123456")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT: int = int(os.getenv("POSTGRES_PORT", "5432"))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "shop")
    # 非空时覆盖上面的 Postgres 配置（例如 sqlite:///./shop.db）
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Redis 配置
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_HOSTS: str = os.getenv("REDIS_HOSTS", "")

    # Celery 使用的 Redis 库
    CELERY_BROKER_DB: int = int(os.getenv("CELERY_BROKER_DB", "1"))
    CELERY_BACKEND_DB: int = int(os.getenv("CELERY_BACKEND_DB", "2"))

    # 接口配置
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/shop")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # 支付配置（模拟网关）
    PAYMENT_CURRENCY: str = os.getenv("PAYMENT_CURRENCY", "usd")
    PAYMENT_METHOD: str = os.getenv("PAYMENT_METHOD", "stripe")
    PAYMENT_FAILURE_MODE: str = os.getenv("PAYMENT_FAILURE_MODE", "none")

    # 支付确认分布式锁 TTL（毫秒）
    CAPTURE_LOCK_TTL_MS: int = int(os.getenv("CAPTURE_LOCK_TTL_MS", "10000"))

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg://"
            f"{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    @property
    def redis_url(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @property
    def celery_broker_url(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.CELERY_BROKER_DB}"

    @property
    def celery_result_backend(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.CELERY_BACKEND_DB}"

settings = Settings()
