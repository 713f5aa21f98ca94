"""
LLM 服务封装 - 通过 OpenRouter 调用对话模型，强制函数调用
"""
from typing import Any, Optional

import httpx
import openai
from langchain_core.messages import (
    AIMessage,
    HumanMessage,
    SystemMessage,
    convert_to_openai_messages,
)
from langchain_core.utils.function_calling import convert_to_openai_tool
from langchain_openai import ChatOpenAI

from painting_agent.core import Settings, get_settings, get_logger
from painting_agent.core.exceptions import (
    UpstreamNetworkError,
    UpstreamProtocolError,
    error_for_status,
)

logger = get_logger(__name__)


class LLMService:
    """
    LLM 服务封装

    每次调用只发一次请求，SDK 自带重试关闭。
    函数调用走 ChatOpenAI 的底层 OpenAI 客户端，返回供应商原始的 arguments 字符串
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """初始化 LLM 客户端"""
        self.settings = settings or get_settings()
        self.llm = ChatOpenAI(
            model=self.settings.openrouter_model,
            openai_api_key=self.settings.require_openrouter_key(),
            base_url=self.settings.openrouter_base_url,
            timeout=self.settings.idea_request_timeout,
            max_retries=0,
            http_client=http_client,
        )
        logger.info(f"LLM 服务初始化完成，使用模型: {self.settings.openrouter_model}")

    def call_function(
        self,
        messages: list[dict],
        function: dict,
        system_prompt: Optional[str] = None,
    ) -> str:
        """
        强制模型调用指定函数，返回原始 arguments 字符串

        Args:
            messages: 消息列表 [{"role": "user", "content": "..."}]
            function: OpenAI function 定义（name/description/parameters）
            system_prompt: 系统提示

        Returns:
            第一个 tool call 的 arguments（未解析的 JSON 字符串）
        """
        langchain_messages = []
        if system_prompt:
            langchain_messages.append(SystemMessage(content=system_prompt))

        for msg in messages:
            if msg["role"] == "user":
                langchain_messages.append(HumanMessage(content=msg["content"]))
            elif msg["role"] == "assistant":
                langchain_messages.append(AIMessage(content=msg["content"]))

        try:
            completion = self.llm.root_client.chat.completions.create(
                model=self.llm.model_name,
                messages=convert_to_openai_messages(langchain_messages),
                tools=[convert_to_openai_tool(function)],
                tool_choice={"type": "function", "function": {"name": function["name"]}},
            )
        except openai.APIStatusError as e:
            raise error_for_status(e.status_code, e.message, provider="OpenRouter") from e
        except openai.APIConnectionError as e:
            raise UpstreamNetworkError(
                "No response received from OpenRouter API - check your internet connection"
            ) from e

        arguments = _extract_tool_arguments(completion)
        if not arguments:
            raise UpstreamProtocolError("No function arguments returned from OpenRouter.")
        return arguments


def _extract_tool_arguments(completion: Any) -> Optional[str]:
    """从 ChatCompletion 中取出第一个 tool call 的原始参数"""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None

    tool_calls = choices[0].message.tool_calls or []
    if not tool_calls:
        return None

    function = getattr(tool_calls[0], "function", None)
    return function.arguments if function is not None else None

