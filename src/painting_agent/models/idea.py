"""
创意数据模型
"""
from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field

from .timestamps import utc_now


class Idea(SQLModel, table=True):
    """
    绘画创意模型

    由创意生成服务写入，写入后不再修改
    """
    __tablename__ = "ideas"

    # 主键
    id: Optional[int] = Field(default=None, primary_key=True)

    # 关联标题
    title_id: int = Field(index=True, description="关联的标题ID")

    # 创意内容
    summary: str = Field(description="创意摘要（30-50词）")
    full_prompt: str = Field(description="完整生图提示词（100-200词）")

    # 时间戳
    created_at: datetime = Field(default_factory=utc_now, description="创建时间")
