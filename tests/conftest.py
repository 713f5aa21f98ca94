"""
测试配置
"""
import os
import sys
import pytest

# 添加 src 目录到 Python 路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

# 设置测试环境变量
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["OPENROUTER_API_KEY"] = "test-key"


@pytest.fixture
def test_db():
    """测试数据库 fixture"""
    from sqlalchemy.pool import StaticPool
    from sqlmodel import create_engine, SQLModel
    from painting_agent.core.database import init_db

    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def records(test_db):
    """绑定到测试数据库的记录服务"""
    from painting_agent.services.record_service import RecordService

    return RecordService(engine=test_db)


@pytest.fixture
def settings(tmp_path):
    """指向临时上传目录的配置"""
    from painting_agent.core.config import Settings

    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        openrouter_api_key="test-key",
        uploads_dir=str(tmp_path / "uploads"),
    )
