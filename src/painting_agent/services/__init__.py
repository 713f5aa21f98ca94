"""
服务模块
"""
from .idea_service import IdeaService, get_idea_service
from .image_service import ImageService, get_image_service
from .record_service import RecordService, get_record_service

__all__ = [
    "IdeaService",
    "get_idea_service",
    "ImageService",
    "get_image_service",
    "RecordService",
    "get_record_service",
]
