"""
创建数据库表
"""
from painting_agent.core import get_settings
from painting_agent.core.database import build_engine, init_db

settings = get_settings()

if __name__ == "__main__":
    # 创建引擎（打印建表 SQL）
    engine = build_engine(settings.database_url, echo=True)

    # 创建所有表
    init_db(engine)

    print("✅ 数据库表创建完成")
