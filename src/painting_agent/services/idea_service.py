"""
创意生成服务 - 根据标题生成绘画创意
"""
import asyncio
from typing import Optional, Sequence

from painting_agent.core import Settings, get_settings, get_logger, log_elapsed
from painting_agent.core.exceptions import IncompleteDataError, ValidationError
from painting_agent.models import Idea
from painting_agent.services.json_repair import parse_tool_arguments
from painting_agent.services.llm_service import LLMService
from painting_agent.services.record_service import RecordService, get_record_service

logger = get_logger(__name__)

# 参与去重提示的历史创意条数
PREVIOUS_IDEAS_LIMIT = 3

SYSTEM_PROMPT = (
    "You are a creative painting designer. "
    "Generate unique painting concepts that haven't been suggested before."
)

SAVE_PAINTING_IDEA_FUNCTION = {
    "name": "savePaintingIdea",
    "description": "Save a painting idea",
    "parameters": {
        "type": "object",
        "properties": {
            "summary": {
                "type": "string",
                "description": "A short summary of the painting idea (30-50 words)",
            },
            "fullPrompt": {
                "type": "string",
                "description": (
                    "The full prompt to generate this painting image "
                    "(100-200 words with detailed visual instructions)"
                ),
            },
        },
        "required": ["summary", "fullPrompt"],
    },
}


def build_idea_prompt(
    title_text: str,
    instructions: Optional[str] = None,
    previous_ideas: Optional[Sequence[Idea]] = None,
) -> str:
    """拼装用户提示词，历史创意只取最近 3 条"""
    lines = [f'Create a painting concept for the title: "{title_text}".']
    if instructions:
        lines.append(f"Custom instructions: {instructions}")

    last_ideas = list(previous_ideas or [])[-PREVIOUS_IDEAS_LIMIT:]
    if last_ideas:
        summaries = "; ".join(idea.summary for idea in last_ideas)
        lines.append(f"Previous painting ideas: {summaries}")

    lines.append(
        "Please generate a completely new and different painting idea "
        "that hasn't been suggested yet."
    )
    return "\n".join(lines)


class IdeaService:
    """创意生成服务"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm: Optional[LLMService] = None,
        records: Optional[RecordService] = None,
    ):
        self.settings = settings or get_settings()
        self._llm = llm
        self.records = records or get_record_service()

    @property
    def llm(self) -> LLMService:
        # 延迟创建：缺少 Key 时应先抛出 ConfigError，而不是在构造客户端时失败
        if self._llm is None:
            self._llm = LLMService(self.settings)
        return self._llm

    def _validate(self, title_id: int, title_text: str) -> None:
        if not title_id:
            raise ValidationError("Title ID is required for idea generation")
        if not title_text or not title_text.strip():
            raise ValidationError("Title text is required for idea generation")
        self.settings.require_openrouter_key()

    async def generate_ideas(
        self,
        title_id: int,
        title_text: str,
        instructions: Optional[str] = None,
        previous_ideas: Optional[Sequence[Idea]] = None,
    ) -> Idea:
        """
        生成一条绘画创意并落库

        Args:
            title_id: 标题ID
            title_text: 标题文本
            instructions: 自定义要求（可选）
            previous_ideas: 该标题已有的创意，用于避免重复

        Returns:
            已保存的 Idea
        """
        self._validate(title_id, title_text)

        prompt = build_idea_prompt(title_text, instructions, previous_ideas)

        logger.info(f"开始生成创意，title_id={title_id}")
        with log_elapsed(logger, "创意模型调用完成"):
            arguments: str = await asyncio.to_thread(
                self.llm.call_function,
                messages=[{"role": "user", "content": prompt}],
                function=SAVE_PAINTING_IDEA_FUNCTION,
                system_prompt=SYSTEM_PROMPT,
            )

        idea_data = parse_tool_arguments(arguments)
        if not isinstance(idea_data, dict):
            raise IncompleteDataError("Incomplete idea data received from AI")

        summary = idea_data.get("summary")
        full_prompt = idea_data.get("fullPrompt")
        if not summary or not full_prompt:
            raise IncompleteDataError("Incomplete idea data received from AI")

        idea = self.records.insert_idea(title_id, summary, full_prompt)
        logger.info(f"创意已保存: idea_id={idea.id}, title_id={title_id}")
        return idea


# 全局单例
_idea_service: Optional[IdeaService] = None


def get_idea_service() -> IdeaService:
    """获取创意生成服务单例"""
    global _idea_service
    if _idea_service is None:
        _idea_service = IdeaService()
    return _idea_service
