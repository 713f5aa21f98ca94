"""
上游错误分类测试
"""
import pytest

from painting_agent.core.exceptions import (
    UpstreamAccessError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamErrorKind,
    UpstreamNetworkError,
    UpstreamRateLimitError,
    UpstreamRequestError,
    UpstreamServerError,
    ValidationError,
    error_for_status,
)


@pytest.mark.parametrize(
    "status_code, expected_type, terminal",
    [
        (401, UpstreamAuthError, True),
        (403, UpstreamAccessError, True),
        (400, UpstreamRequestError, True),
        (422, UpstreamRequestError, True),
        (429, UpstreamRateLimitError, False),
        (500, UpstreamServerError, False),
        (503, UpstreamServerError, False),
    ],
)
def test_status_mapping(status_code, expected_type, terminal) -> None:
    error = error_for_status(status_code, "detail")
    assert type(error) is expected_type
    assert error.status_code == status_code
    assert error.is_terminal is terminal


def test_unmapped_status_is_tier_local() -> None:
    error = error_for_status(404, "model not found")
    assert type(error) is UpstreamError
    assert error.kind is UpstreamErrorKind.OTHER
    assert not error.is_terminal
    assert "404" in str(error)


def test_request_error_carries_provider_detail() -> None:
    error = error_for_status(400, "prompt rejected by safety system")
    assert str(error) == "Invalid request: prompt rejected by safety system"


def test_network_error_is_not_terminal() -> None:
    assert not UpstreamNetworkError("timeout").is_terminal


def test_validation_error_is_value_error() -> None:
    assert issubclass(ValidationError, ValueError)
