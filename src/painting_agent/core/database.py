"""
数据库连接管理 - 统一管理数据库连接
"""
from sqlmodel import SQLModel, create_engine

from painting_agent.core.config import get_settings


def _connect_args(database_url: str) -> dict:
    # SQLite 连接会被 asyncio.to_thread 的工作线程复用
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def build_engine(database_url: str, echo: bool = False):
    """按连接串创建引擎"""
    return create_engine(database_url, echo=echo, connect_args=_connect_args(database_url))


def init_db(target=None) -> None:
    """创建 ideas / paintings 表（已存在则跳过）"""
    import painting_agent.models  # noqa: F401  注册表结构

    SQLModel.metadata.create_all(target or engine)


# 创建全局数据库引擎
_settings = get_settings()
engine = build_engine(_settings.database_url)

__all__ = ["engine", "build_engine", "init_db"]
