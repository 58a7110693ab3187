"""Redis 客户端配置模块"""

from redis.asyncio import Redis as AsyncRedis
from redlock import Redlock

from app.core.config import settings

REDIS_URL = settings.redis_url

# 异步 Redis 客户端（启动时健康检查）
async_redis = AsyncRedis.from_url(REDIS_URL, decode_responses=True)


# Redlock 配置（支持单实例和多实例）
def create_redlock(redis_hosts: str = None):
    """根据配置动态创建 Redlock 实例"""
    redis_hosts = redis_hosts or settings.REDIS_HOSTS or settings.REDIS_HOST

    if "," in redis_hosts:  # 多实例模式
        hosts = [host.strip() for host in redis_hosts.split(",") if host.strip()]
    else:  # 单实例模式
        hosts = [redis_hosts.strip()]

    servers = [
        {"host": host, "port": settings.REDIS_PORT, "db": settings.REDIS_DB}
        for host in hosts
    ]
    return Redlock(servers)

redlock = create_redlock()

# 导出
__all__ = [
    "async_redis",
    "redlock",
    "create_redlock",
    "REDIS_URL"
]
