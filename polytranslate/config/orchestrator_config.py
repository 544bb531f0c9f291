"""
/**
 * @file polytranslate/config/orchestrator_config.py
 * @description 编排器运行参数：由 Settings 与请求级覆盖项合成，构造时注入。
 */
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .settings import Settings


@dataclass(frozen=True)
class OrchestratorConfig:
    concurrency_limit: int = 3
    retry_attempts: int = 2
    retry_delay: float = 0.5
    attempt_timeout: float = 15.0
    minimum_completeness: float = 0.8
    completeness_rounds: int = 1
    fallback_policy: str = "original"
    sentinels: Tuple[str, ...] = field(default_factory=lambda: ("--",))
    staging_dir: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrchestratorConfig":
        return cls(
            concurrency_limit=settings.concurrency_limit,
            retry_attempts=settings.retry_attempts,
            retry_delay=settings.retry_delay,
            attempt_timeout=settings.attempt_timeout,
            minimum_completeness=settings.minimum_completeness,
            completeness_rounds=settings.completeness_rounds,
            fallback_policy=settings.fallback_policy,
            sentinels=tuple(settings.sentinels),
            staging_dir=settings.staging_dir,
        )

    def with_overrides(
        self,
        concurrency_limit: Optional[int] = None,
        retry_attempts: Optional[int] = None,
        minimum_completeness: Optional[float] = None,
    ) -> "OrchestratorConfig":
        changes = {}
        if concurrency_limit is not None:
            changes["concurrency_limit"] = concurrency_limit
        if retry_attempts is not None:
            changes["retry_attempts"] = retry_attempts
        if minimum_completeness is not None:
            changes["minimum_completeness"] = minimum_completeness
            # An explicit threshold only makes sense with the completeness policy.
            changes["fallback_policy"] = "completeness"
        return replace(self, **changes) if changes else self
