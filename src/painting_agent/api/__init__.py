"""
API 路由模块
"""
from fastapi import APIRouter
from .ideas import router as ideas_router
from .paintings import router as paintings_router

# 创建主路由
api_router = APIRouter(prefix="/api")

api_router.include_router(ideas_router)
api_router.include_router(paintings_router)

__all__ = ["api_router"]
