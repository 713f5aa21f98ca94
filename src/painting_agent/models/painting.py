"""
绘画记录数据模型
"""
from datetime import datetime
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel
from sqlmodel import SQLModel, Field

from .timestamps import utc_now


class PaintingStatus(str, Enum):
    """绘画生成状态: processing -> completed / failed"""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Painting(SQLModel, table=True):
    """
    绘画记录模型

    每次生成都会先回到 processing，再落到 completed 或 failed 之一
    """
    __tablename__ = "paintings"

    # 主键
    id: Optional[int] = Field(default=None, primary_key=True)

    # 关联创意（按 idea_id 更新）
    idea_id: int = Field(index=True, unique=True, description="关联的创意ID")

    # 状态
    status: str = Field(
        default=PaintingStatus.PROCESSING.value,
        description="状态: processing/completed/failed"
    )

    # 生成结果
    image_url: Optional[str] = Field(default=None, description="图片相对路径")
    image_data: Optional[str] = Field(default=None, description="data URL 形式的 base64 图片")
    error_message: Optional[str] = Field(default=None, max_length=255, description="错误信息")

    # 参考图ID（JSON数组）
    used_reference_ids: Optional[str] = Field(default=None, description="使用的参考图ID JSON")

    # 时间戳
    created_at: datetime = Field(default_factory=utc_now, description="创建时间")
    updated_at: datetime = Field(default_factory=utc_now, description="更新时间")


class ReferenceImage(BaseModel):
    """参考图（仅作为输入，不落库）"""
    id: Optional[Union[int, str]] = None
    image_data: str  # data:image/png;base64,...
