"""
创意生成 API
"""
from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from painting_agent.core import get_logger
from painting_agent.core.exceptions import (
    IncompleteDataError,
    UpstreamError,
    ValidationError,
)
from painting_agent.services.idea_service import get_idea_service
from painting_agent.services.record_service import get_record_service

logger = get_logger(__name__)
router = APIRouter(prefix="/ideas", tags=["创意"])


# ============ 请求/响应模型 ============

class GenerateIdeaRequest(BaseModel):
    """创意生成请求"""
    title_id: int
    title_text: str
    instructions: Optional[str] = None  # 自定义要求


class IdeaResponse(BaseModel):
    """创意响应"""
    id: int
    title_id: int
    summary: str
    full_prompt: str
    created_at: str


def _idea_to_response(idea) -> IdeaResponse:
    return IdeaResponse(
        id=idea.id,
        title_id=idea.title_id,
        summary=idea.summary,
        full_prompt=idea.full_prompt,
        created_at=idea.created_at.isoformat(),
    )


# ============ API 接口 ============

@router.post("", response_model=IdeaResponse)
async def generate_idea(request: GenerateIdeaRequest):
    """
    为标题生成一条新的绘画创意

    同一标题下已有的创意会作为上下文，避免重复
    """
    records = get_record_service()
    idea_service = get_idea_service()
    try:
        previous_ideas = records.list_ideas_by_title(request.title_id)
        idea = await idea_service.generate_ideas(
            title_id=request.title_id,
            title_text=request.title_text,
            instructions=request.instructions,
            previous_ideas=previous_ideas,
        )
        return _idea_to_response(idea)

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (UpstreamError, IncompleteDataError) as e:
        logger.error(f"创意生成失败: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"创意生成失败: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=list[IdeaResponse])
async def list_ideas(title_id: int):
    """获取某个标题下的全部创意"""
    records = get_record_service()
    return [_idea_to_response(idea) for idea in records.list_ideas_by_title(title_id)]


@router.get("/{idea_id}", response_model=IdeaResponse)
async def get_idea(idea_id: int):
    """获取创意详情"""
    idea = get_record_service().get_idea(idea_id)
    if not idea:
        raise HTTPException(status_code=404, detail="创意不存在")
    return _idea_to_response(idea)
