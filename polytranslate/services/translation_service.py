"""
/**
 * @file polytranslate/services/translation_service.py
 * @description 多语言翻译编排：按（语言, 键）并发调用后端，重试/回退后组装结果。
 */
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from contextlib import nullcontext
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from polytranslate.config import OrchestratorConfig, Settings, load_settings
from polytranslate.models.translate_request_model import TranslationRequest
from polytranslate.models.translation_result_model import (
    ACCEPTED,
    COMPLETED,
    EXHAUSTED,
    FAILED,
    FALLBACK,
    PARTIAL,
    SUCCESS,
    KeyStatus,
    LanguageReport,
    MultiTranslationResult,
    TranslationAttempt,
)
from polytranslate.services.backends import TranslateOptions, TranslationBackend
from polytranslate.services.exceptions import AggregateFailure, BackendInvocationError, BackendSentinelFailure
from polytranslate.utils.file_utils import staging_area

logger = logging.getLogger(__name__)

IDENTITY_BACKEND = "identity"


class TranslationOrchestrator:
    """
    Fans out one task per (language, key) string entry, bounded by
    ``config.concurrency_limit``. Each task owns its ``KeyStatus`` slot, so
    completion order never matters; output is rebuilt in request order.
    """

    def __init__(
        self,
        config: OrchestratorConfig,
        backends: Sequence[TranslationBackend],
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not backends:
            raise ValueError("At least one translation backend is required")
        self.config = config
        self.backends = list(backends)
        self._sleep = sleep
        self._sentinels = {s.strip() for s in config.sentinels}

    def translate(self, request: TranslationRequest) -> MultiTranslationResult:
        started = time.perf_counter()
        data = request.data
        string_keys = [k for k, v in data.items() if isinstance(v, str)]
        reports: Dict[str, LanguageReport] = {}
        tasks: List[Tuple[str, str]] = []

        for lang in request.to_languages:
            report = LanguageReport(language=lang, keys={k: KeyStatus() for k in string_keys})
            reports[lang] = report
            same_language = request.source != "auto" and request.source == lang
            for k in string_keys:
                if same_language or not data[k].strip():
                    status = report.keys[k]
                    status.state, status.backend, status.value = ACCEPTED, IDENTITY_BACKEND, data[k]
                else:
                    tasks.append((lang, k))

        # Only file-exchanging backends get an on-disk area.
        needs_staging = any(b.requires_staging for b in self.backends)
        scope = staging_area(self.config.staging_dir) if needs_staging else nullcontext(None)
        with scope as staging:
            options = TranslateOptions(timeout=self.config.attempt_timeout, staging_dir=staging)
            self._run_round(tasks, request, reports, options)

            if self.config.fallback_policy == "completeness":
                for round_no in range(self.config.completeness_rounds):
                    retry = [
                        (lang, k)
                        for lang, report in reports.items()
                        if self._completeness(report) < self.config.minimum_completeness
                        for k in report.failed_keys
                    ]
                    if not retry:
                        break
                    logger.info(f"Completeness round {round_no + 1}: retrying {len(retry)} keys")
                    self._run_round(retry, request, reports, options)

        for report in reports.values():
            self._finalize(report, data)

        failed = sum(1 for r in reports.values() if r.status == FAILED)
        if failed == 0:
            overall = SUCCESS
        elif failed == len(reports):
            overall = FAILED
        else:
            overall = PARTIAL

        result = MultiTranslationResult(
            status=overall,
            languages=reports,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        logger.info(
            f"Translated {len(string_keys)} keys into {len(reports)} languages: "
            f"status={overall}, failed={result.failed_languages}, {result.duration_ms:.0f}ms"
        )
        return result

    def _run_round(
        self,
        tasks: List[Tuple[str, str]],
        request: TranslationRequest,
        reports: Dict[str, LanguageReport],
        options: TranslateOptions,
    ) -> None:
        if not tasks:
            return
        workers = max(1, min(self.config.concurrency_limit, len(tasks)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(
                    self._translate_key, lang, key, request.data[key], request.source, options, reports[lang].keys[key]
                ): (lang, key)
                for lang, key in tasks
            }
            for f in concurrent.futures.as_completed(futures):
                lang, key = futures[f]
                try:
                    f.result()
                except Exception as e:
                    logger.error(f"Task {lang}/{key} crashed: {e}")
                    reports[lang].keys[key].error = str(e)

    def _translate_key(
        self, lang: str, key: str, text: str, source: str, options: TranslateOptions, status: KeyStatus
    ) -> None:
        for _ in range(self.config.retry_attempts):
            if status.attempts > 0 and self.config.retry_delay > 0:
                self._sleep(self.config.retry_delay)
            backend = self.backends[status.attempts % len(self.backends)]
            attempt = self._attempt(backend, lang, key, text, source, options)
            status.fold(attempt)
            if attempt.ok:
                return
            logger.warning(f"[{lang}/{key}] attempt {status.attempts} via {backend.name} failed: {attempt.error}")

    def _attempt(
        self, backend: TranslationBackend, lang: str, key: str, text: str, source: str, options: TranslateOptions
    ) -> TranslationAttempt:
        attempt = TranslationAttempt(language=lang, key=key, source_text=text, backend=backend.name)
        t0 = time.perf_counter()
        try:
            translated = backend.translate(text, source, lang, options)
            self._classify(translated, text, backend.name)
            attempt.translated = translated
        except BackendInvocationError as e:
            attempt.error = str(e)
        except Exception as e:
            attempt.error = f"[{backend.name}] {type(e).__name__}: {e}"
        attempt.duration_ms = (time.perf_counter() - t0) * 1000
        return attempt

    def _classify(self, value: Any, source_text: str, backend_name: str) -> None:
        if not isinstance(value, str) or not value.strip():
            raise BackendInvocationError("Empty translation", backend=backend_name)
        # A value echoing its own source ("Error" -> "Error") is a real answer.
        if value.strip() in self._sentinels and value.strip() != source_text.strip():
            raise BackendSentinelFailure(value, backend=backend_name)

    @staticmethod
    def _completeness(report: LanguageReport) -> float:
        total = len(report.keys)
        return report.translated_count / total if total else 1.0

    def _finalize(self, report: LanguageReport, data: Dict[str, Any]) -> None:
        policy = self.config.fallback_policy
        report.completeness = self._completeness(report)
        translated = report.translated_count
        missing = len(report.keys) - translated

        if missing == 0:
            report.status = COMPLETED
        elif policy == "original":
            report.status = FAILED if translated == 0 else PARTIAL
        elif policy == "completeness" and report.completeness >= self.config.minimum_completeness:
            report.status = PARTIAL
        else:
            report.status = FAILED

        keep_output = report.status != FAILED or policy == "original"
        for status in report.keys.values():
            if status.state != ACCEPTED:
                status.state = FALLBACK if keep_output else EXHAUSTED

        if keep_output:
            report.output = {
                k: (report.keys[k].value if k in report.keys and report.keys[k].state == ACCEPTED else v)
                for k, v in data.items()
            }


def aggregate_failure(result: MultiTranslationResult, config: OrchestratorConfig, backends: Sequence[TranslationBackend]) -> AggregateFailure:
    names = [b.name for b in backends]
    errors = {}
    for lang, report in result.languages.items():
        errors[lang] = sorted({k.error for k in report.keys.values() if k.error})
    suggestions = []
    if config.concurrency_limit > 1:
        suggestions.append(f"Reduce 'concurrencylimit' below {config.concurrency_limit} to ease backend rate limits.")
    suggestions.append(f"Switch 'module' to a backend other than {', '.join(names)}.")
    suggestions.append("Increase the retry delay or 'retryAttempts' so transient backend errors can recover.")
    return AggregateFailure(
        "No language produced a successful translation.",
        details={"backends": names, "errors": errors, "summary": result.summary()},
        suggestions=suggestions,
    )


def translate_multiple(
    request: TranslationRequest,
    backends: Sequence[TranslationBackend],
    settings: Optional[Settings] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> MultiTranslationResult:
    """
    Build the orchestrator for one request and run it.

    Raises ``AggregateFailure`` when every language failed.
    """
    s = settings or load_settings()
    config = OrchestratorConfig.from_settings(s).with_overrides(
        concurrency_limit=request.concurrency_limit,
        retry_attempts=request.retry_attempts,
        minimum_completeness=request.minimum_completeness,
    )
    result = TranslationOrchestrator(config, backends, sleep=sleep).translate(request)
    if result.status == FAILED:
        raise aggregate_failure(result, config, backends)
    return result
