"""
时间戳工具 - 数据库只接受带时区的时间
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """当前 UTC 时间（带时区）"""
    return datetime.now(timezone.utc)
