"""
数据模型模块
"""
from .idea import Idea
from .painting import Painting, PaintingStatus, ReferenceImage
from .timestamps import utc_now

__all__ = [
    "Idea",
    "Painting",
    "PaintingStatus",
    "ReferenceImage",
    "utc_now",
]
