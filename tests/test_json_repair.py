"""
函数参数解析测试
"""
import pytest

from painting_agent.core.exceptions import UpstreamDataError, UpstreamErrorKind
from painting_agent.services.json_repair import parse_tool_arguments, repair_json_text


def test_valid_json_parsed_strictly() -> None:
    data = parse_tool_arguments('{"summary": "a\\nb", "fullPrompt": "c"}')
    # 严格解析成功时保留合法的转义换行
    assert data == {"summary": "a\nb", "fullPrompt": "c"}


def test_raw_newline_is_repaired() -> None:
    data = parse_tool_arguments('{"summary":"a\nb","fullPrompt":"c"}')
    assert data["summary"] == "a b"
    assert data["fullPrompt"] == "c"


def test_escaped_quotes_are_repaired() -> None:
    raw = '{\\"summary\\": \\"barn\\", \\"fullPrompt\\": \\"red barn\\"}'
    data = parse_tool_arguments(raw)
    assert data == {"summary": "barn", "fullPrompt": "red barn"}


def test_repair_text_replaces_carriage_returns() -> None:
    assert repair_json_text("a\r\nb") == "a  b"


def test_unrepairable_payload_raises_data_error() -> None:
    with pytest.raises(UpstreamDataError) as exc_info:
        parse_tool_arguments('{"summary": "unterminated')
    assert exc_info.value.kind is UpstreamErrorKind.DATA
    assert not exc_info.value.is_terminal
