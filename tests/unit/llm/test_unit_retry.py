# tests/unit/llm/test_unit_retry.py - v1
"""Tests for llm/retry.py - error classification and backoff loop."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from medsite.llm.retry import (
    LLMRetryExhausted,
    RetryConfig,
    _compute_delay,
    build_retry_configs,
    classify_error,
    with_retry,
)


class RateLimitError(Exception):
    pass


class _StatusError(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"status {status_code}")
        self.status_code = status_code


class TestClassifyError:
    @pytest.mark.parametrize(
        "error,expected",
        [
            (asyncio.TimeoutError(), "timeout"),
            (RateLimitError("slow down"), "rate_limit"),
            (_StatusError(429), "rate_limit"),
            (Exception("API is overloaded"), "rate_limit"),
            (Exception("request timed out"), "timeout"),
            (_StatusError(503), "server_error"),
            (ConnectionError("reset"), "server_error"),
            (ValueError("bad prompt"), "unknown"),
        ],
    )
    def test_classification(self, error, expected):
        assert classify_error(error) == expected


class TestComputeDelay:
    def test_exponential_without_jitter(self):
        config = RetryConfig(max_retries=3, base_delay_s=1.0, jitter=False)
        assert [_compute_delay(config, i) for i in range(3)] == [1.0, 2.0, 4.0]

    def test_jitter_bounds(self):
        config = RetryConfig(max_retries=3, base_delay_s=1.0)
        for _ in range(20):
            assert 0.5 <= _compute_delay(config, 0) < 1.5


class TestWithRetry:
    @pytest.mark.asyncio
    async def test_success_first_try(self):
        fn = AsyncMock(return_value="ok")
        assert await with_retry(fn, "a", agent="test", key="v") == "ok"
        fn.assert_awaited_once_with("a", key="v")

    @pytest.mark.asyncio
    async def test_transient_then_success(self):
        fn = AsyncMock(side_effect=[RateLimitError("429"), "ok"])
        result = await with_retry(fn, agent="test", retry_configs=build_retry_configs(2, 0.0))
        assert result == "ok"
        assert fn.await_count == 2

    @pytest.mark.asyncio
    async def test_exhausted(self):
        fn = AsyncMock(side_effect=asyncio.TimeoutError())
        with pytest.raises(LLMRetryExhausted) as exc_info:
            await with_retry(fn, agent="generator", retry_configs=build_retry_configs(2, 0.0))
        err = exc_info.value
        assert err.attempts == 3
        assert err.error_type == "timeout"
        assert err.error_history == ["timeout"] * 3
        assert fn.await_count == 3

    @pytest.mark.asyncio
    async def test_unknown_error_not_retried(self):
        fn = AsyncMock(side_effect=ValueError("bad"))
        with pytest.raises(LLMRetryExhausted) as exc_info:
            await with_retry(fn, agent="test", retry_configs=build_retry_configs(3, 0.0))
        assert exc_info.value.attempts == 1
        assert isinstance(exc_info.value.last_error, ValueError)
        assert fn.await_count == 1

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        fn = AsyncMock(side_effect=RateLimitError("429"))
        with pytest.raises(LLMRetryExhausted):
            await with_retry(fn, agent="test", retry_configs=build_retry_configs(0, 0.0))
        assert fn.await_count == 1


class TestBuildRetryConfigs:
    def test_uniform_policy(self):
        configs = build_retry_configs(5, 0.25)
        assert set(configs) == {"rate_limit", "timeout", "server_error"}
        assert all(c.max_retries == 5 and c.base_delay_s == 0.25 for c in configs.values())
