"""
绘画生成 API
"""
from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from painting_agent.core import get_logger
from painting_agent.core.exceptions import UpstreamError, ValidationError
from painting_agent.models import ReferenceImage
from painting_agent.services.image_service import get_image_service
from painting_agent.services.record_service import get_record_service

logger = get_logger(__name__)
router = APIRouter(prefix="/paintings", tags=["绘画"])


class GeneratePaintingRequest(BaseModel):
    """绘画生成请求"""
    idea_id: int
    prompt: Optional[str] = None  # 为空时使用创意的 full_prompt
    references: list[ReferenceImage] = []


class GeneratePaintingResponse(BaseModel):
    """绘画生成结果"""
    idea_id: int
    image_url: str
    status: str


class PaintingResponse(BaseModel):
    """绘画记录响应"""
    idea_id: int
    status: str
    image_url: Optional[str]
    image_data: Optional[str]
    error_message: Optional[str]
    used_reference_ids: Optional[str]
    updated_at: str


@router.post("", response_model=GeneratePaintingResponse)
async def generate_painting(request: GeneratePaintingRequest):
    """根据创意生成图片"""
    records = get_record_service()

    idea = records.get_idea(request.idea_id)
    if not idea:
        raise HTTPException(status_code=404, detail="创意不存在")
    prompt = request.prompt or idea.full_prompt

    records.ensure_painting(request.idea_id)
    try:
        result = await get_image_service().generate_image(
            idea_id=request.idea_id,
            prompt=prompt,
            references=request.references,
        )
        return GeneratePaintingResponse(**result)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"绘画生成失败: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{idea_id}", response_model=PaintingResponse)
async def get_painting(idea_id: int):
    """获取创意对应的绘画记录"""
    painting = get_record_service().get_painting(idea_id)
    if not painting:
        raise HTTPException(status_code=404, detail="绘画记录不存在")

    return PaintingResponse(
        idea_id=painting.idea_id,
        status=painting.status,
        image_url=painting.image_url,
        image_data=painting.image_data,
        error_message=painting.error_message,
        used_reference_ids=painting.used_reference_ids,
        updated_at=painting.updated_at.isoformat(),
    )
