"""
异常定义 - 统一的错误分类

上游错误在构造时即带上 UpstreamErrorKind，回退链按类型判断是否继续，
不依赖错误消息文本。
"""
from enum import Enum
from typing import Optional


class PaintingAgentError(Exception):
    """所有业务异常的基类"""


class ValidationError(PaintingAgentError, ValueError):
    """调用方输入缺失或非法"""


class ConfigError(PaintingAgentError):
    """缺少必要配置（如 API Key）"""


class ParameterError(PaintingAgentError):
    """持久化参数非法，在执行 SQL 之前拒绝"""


class IncompleteDataError(PaintingAgentError):
    """上游数据可解析，但缺少必填字段"""


class UpstreamErrorKind(str, Enum):
    """上游错误类型"""

    AUTH = "auth"
    ACCESS = "access"
    RATE_LIMIT = "rate_limit"
    REQUEST = "request"
    SERVER = "server"
    NETWORK = "network"
    DATA = "data"
    OTHER = "other"


# 换任何一个模型都会以同样方式失败的错误
TERMINAL_KINDS = frozenset(
    {UpstreamErrorKind.AUTH, UpstreamErrorKind.ACCESS, UpstreamErrorKind.REQUEST}
)


class UpstreamError(PaintingAgentError):
    """外部 AI 服务调用失败"""

    kind: UpstreamErrorKind = UpstreamErrorKind.OTHER

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_terminal(self) -> bool:
        """是否应立即中止回退链"""
        return self.kind in TERMINAL_KINDS


class UpstreamAuthError(UpstreamError):
    kind = UpstreamErrorKind.AUTH


class UpstreamAccessError(UpstreamError):
    kind = UpstreamErrorKind.ACCESS


class UpstreamRateLimitError(UpstreamError):
    kind = UpstreamErrorKind.RATE_LIMIT


class UpstreamRequestError(UpstreamError):
    kind = UpstreamErrorKind.REQUEST


class UpstreamServerError(UpstreamError):
    kind = UpstreamErrorKind.SERVER


class UpstreamNetworkError(UpstreamError):
    kind = UpstreamErrorKind.NETWORK


class UpstreamDataError(UpstreamError):
    kind = UpstreamErrorKind.DATA


class UpstreamProtocolError(UpstreamDataError):
    """响应中没有约定的函数调用"""


def error_for_status(
    status_code: int,
    detail: Optional[str] = None,
    provider: str = "OpenAI",
) -> UpstreamError:
    """将 HTTP 状态码映射为对应的上游异常"""
    if status_code == 401:
        return UpstreamAuthError(f"Invalid {provider} API key", status_code)
    if status_code == 403:
        return UpstreamAccessError(
            f"{provider} API access forbidden - check your subscription", status_code
        )
    if status_code == 429:
        return UpstreamRateLimitError(f"{provider} API rate limit exceeded", status_code)
    if status_code in (400, 422):
        return UpstreamRequestError(f"Invalid request: {detail or 'Bad request'}", status_code)
    if status_code >= 500:
        return UpstreamServerError(f"{provider} API server error ({status_code})", status_code)
    return UpstreamError(f"{provider} API error ({status_code}): {detail or ''}".rstrip(), status_code)
