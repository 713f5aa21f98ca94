"""
函数调用参数解析

先严格解析；失败后做一次字符串修复再解析。修复会把字符串值里的合法换行
也替换成空格，属于有损的兜底手段，不是通用的 JSON 修复器。
"""
import json
from typing import Any

from painting_agent.core import get_logger
from painting_agent.core.exceptions import UpstreamDataError

logger = get_logger(__name__)


def repair_json_text(text: str) -> str:
    """去掉裸换行，还原被错误转义的引号"""
    return (
        text.replace("\n", " ")
        .replace("\r", " ")
        .replace("\\'", "'")
        .replace('\\"', '"')
    )


def parse_tool_arguments(text: str) -> Any:
    """解析函数调用的 arguments 字符串"""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.warning("函数参数严格解析失败，尝试修复后重新解析")

    cleaned = repair_json_text(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"函数参数修复后仍无法解析: {e.msg}, 内容: {cleaned[:200]}")
        raise UpstreamDataError(f"Unparseable function arguments: {e.msg}") from e
