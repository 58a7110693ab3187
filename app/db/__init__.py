from .base import Base
from .session import engine


def init_db(bind=None):
    """创建所有数据表"""
    # 导入模型以注册到 Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

# Export for convenience
__all__ = ["Base", "engine", "init_db"]
