"""
记录服务 - ideas / paintings 两张表的读写入口
"""
from typing import Any, Optional
from sqlmodel import Session, select

from painting_agent.core import get_logger
from painting_agent.core.exceptions import ParameterError
from painting_agent.models import Idea, Painting, PaintingStatus, utc_now

logger = get_logger(__name__)

# update_painting_status 允许写入的字段
PAINTING_FIELDS = frozenset(
    {"image_url", "image_data", "error_message", "used_reference_ids"}
)


class RecordService:
    """
    记录服务

    写操作在执行 SQL 前校验参数，非法参数直接抛出 ParameterError
    """

    def __init__(self, engine=None):
        if engine is None:
            from painting_agent.core.database import engine
        self.engine = engine

    def insert_idea(self, title_id: int, summary: str, full_prompt: str) -> Idea:
        """写入一条新创意"""
        params = [title_id, summary, full_prompt]
        if any(p is None for p in params):
            logger.error(f"创意写入参数非法: {params}")
            raise ParameterError("Invalid query parameter detected")

        with Session(self.engine) as session:
            idea = Idea(
                title_id=title_id,
                summary=summary,
                full_prompt=full_prompt,
                created_at=utc_now(),
            )
            session.add(idea)
            session.commit()
            session.refresh(idea)
            return idea

    def update_painting_status(
        self,
        idea_id: int,
        status: PaintingStatus | str,
        **fields: Any,
    ) -> Optional[Painting]:
        """
        按 idea_id 更新绘画状态及附带字段

        Args:
            idea_id: 创意ID
            status: 目标状态
            **fields: 同时写入的字段，仅限 PAINTING_FIELDS

        Returns:
            更新后的记录；记录不存在时返回 None
        """
        try:
            status = PaintingStatus(status)
        except ValueError:
            raise ParameterError(f"Invalid painting status: {status!r}") from None

        unknown = set(fields) - PAINTING_FIELDS
        if idea_id is None or unknown:
            logger.error(f"绘画更新参数非法: idea_id={idea_id}, unknown={sorted(unknown)}")
            raise ParameterError("Invalid query parameter detected")

        with Session(self.engine) as session:
            painting = session.exec(
                select(Painting).where(Painting.idea_id == idea_id)
            ).first()
            if painting is None:
                logger.warning(f"绘画记录不存在，跳过更新: idea_id={idea_id}")
                return None

            painting.status = status.value
            for key, value in fields.items():
                setattr(painting, key, value)
            painting.updated_at = utc_now()
            session.add(painting)
            session.commit()
            session.refresh(painting)
            return painting

    def ensure_painting(self, idea_id: int) -> Painting:
        """确保创意有对应的绘画记录，不存在则创建"""
        with Session(self.engine) as session:
            painting = session.exec(
                select(Painting).where(Painting.idea_id == idea_id)
            ).first()
            if painting is None:
                painting = Painting(idea_id=idea_id)
                session.add(painting)
                session.commit()
                session.refresh(painting)
            return painting

    def get_idea(self, idea_id: int) -> Optional[Idea]:
        """获取创意"""
        with Session(self.engine) as session:
            return session.get(Idea, idea_id)

    def list_ideas_by_title(self, title_id: int) -> list[Idea]:
        """获取某个标题下的全部创意，按创建先后排序"""
        with Session(self.engine) as session:
            statement = (
                select(Idea)
                .where(Idea.title_id == title_id)
                .order_by(Idea.created_at.asc(), Idea.id.asc())
            )
            return list(session.exec(statement).all())

    def get_painting(self, idea_id: int) -> Optional[Painting]:
        """获取创意对应的绘画记录"""
        with Session(self.engine) as session:
            return session.exec(
                select(Painting).where(Painting.idea_id == idea_id)
            ).first()


# 全局单例
_record_service: Optional[RecordService] = None


def get_record_service() -> RecordService:
    """获取记录服务单例"""
    global _record_service
    if _record_service is None:
        _record_service = RecordService()
    return _record_service
