"""
Unit tests for the copy retry policy.

Tests cover:
- Building a policy from settings
- Unbounded retry until success
- Giving up after max_attempts
- Exception type filtering
"""

from __future__ import annotations

import asyncio

import pytest

from folder_organizer.config.settings import Settings
from folder_organizer.core.retry import RetryPolicy
from folder_organizer.errors import CopyError


def copy_error() -> CopyError:
    return CopyError("/src", "/dst", OSError("disk full"))


async def run_with_policy(policy: RetryPolicy, outcomes: list) -> int:
    """Run attempts that pop outcomes: an exception is raised, anything else returned."""
    calls = 0
    async for attempt in policy.controller():
        with attempt:
            calls += 1
            outcome = outcomes.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
    return calls


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_defaults_are_unbounded(self):
        policy = RetryPolicy()
        assert policy.is_unbounded
        assert policy.max_attempts is None

    def test_from_settings_zero_means_unlimited(self):
        settings = Settings()
        settings.update({"wait_seconds": 2, "max_attempts": 0})
        policy = RetryPolicy.from_settings(settings)

        assert policy.wait_seconds == 2.0
        assert policy.max_attempts is None

    def test_from_settings_with_limit(self):
        settings = Settings()
        settings.update({"max_attempts": 4, "backoff_multiplier": 1, "jitter_seconds": 0.5})
        policy = RetryPolicy.from_settings(settings)

        assert policy.max_attempts == 4
        assert policy.backoff_multiplier == 1.0
        assert policy.jitter_seconds == 0.5

    def test_unbounded_policy_retries_until_success(self):
        policy = RetryPolicy(wait_seconds=0)
        outcomes = [copy_error()] * 5 + [None]

        assert asyncio.run(run_with_policy(policy, outcomes)) == 6

    def test_bounded_policy_reraises_last_copy_error(self):
        policy = RetryPolicy(wait_seconds=0, max_attempts=3)
        outcomes = [copy_error() for _ in range(5)]

        with pytest.raises(CopyError):
            asyncio.run(run_with_policy(policy, outcomes))
        assert len(outcomes) == 2

    def test_other_errors_are_not_retried(self):
        policy = RetryPolicy(wait_seconds=0)
        outcomes = [RuntimeError("bug"), None]

        with pytest.raises(RuntimeError):
            asyncio.run(run_with_policy(policy, outcomes))
        assert outcomes == [None]

    def test_backoff_and_jitter_still_retry(self):
        policy = RetryPolicy(
            wait_seconds=0,
            max_attempts=3,
            backoff_multiplier=0.001,
            max_wait_seconds=0.01,
            jitter_seconds=0.001,
        )
        outcomes = [copy_error(), copy_error(), None]

        assert asyncio.run(run_with_policy(policy, outcomes)) == 3
