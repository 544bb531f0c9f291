"""
/**
 * @file polytranslate/utils/validators.py
 * @description 请求校验：数据对象、目标语言列表、语言代码与调优参数。
 */
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from polytranslate.config import Settings
from polytranslate.models.translate_request_model import TranslateMultipleRequest, TranslationRequest
from polytranslate.services.exceptions import ValidationError

AUTO = "auto"

_ALIASES = {
    "iw": "he",
    "in": "id",
    "ji": "yi",
    "jw": "jv",
    "zh-cn": "zh-CN",
    "zh-tw": "zh-TW",
}


def normalize_language(code: str) -> str:
    value = code.strip()
    return _ALIASES.get(value.lower(), value)


def _lookup(code: Any, supported: Dict[str, str], field: str) -> str:
    if not isinstance(code, str) or not code.strip():
        raise ValidationError(f"'{field}' must contain non-empty language code strings.")
    normalized = normalize_language(code)
    match = supported.get(normalized.lower())
    if match is None:
        raise ValidationError(f"Unsupported language code '{code}' in '{field}'.")
    return match


def _positive_int(value: Any, field: str, maximum: int) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"'{field}' must be a positive integer.")
    if value < 1 or value > maximum:
        raise ValidationError(f"'{field}' must be between 1 and {maximum}.")
    return value


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def validate_translation_request(payload: Any, settings: Settings, known_modules: Iterable[str] = ()) -> TranslationRequest:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    req = TranslateMultipleRequest.model_validate(payload)

    if req.data is None or not isinstance(req.data, dict):
        raise ValidationError("Provide 'data' and 'toLanguages' array (ISO codes).")
    if not isinstance(req.toLanguages, list) or not req.toLanguages:
        raise ValidationError("Provide 'data' and 'toLanguages' array (ISO codes).")

    supported = {code.lower(): code for code in settings.supported_languages}
    to_languages = _unique(_lookup(code, supported, "toLanguages") for code in req.toLanguages)

    source = req.from_ if req.from_ is not None else settings.default_from
    if not isinstance(source, str) or not source.strip():
        raise ValidationError("'from' must be a language code or 'auto'.")
    source = AUTO if source.strip().lower() == AUTO else _lookup(source, supported, "from")

    minimum = req.minimumCompleteness
    if minimum is not None:
        if isinstance(minimum, bool) or not isinstance(minimum, (int, float)) or not 0 <= minimum <= 1:
            raise ValidationError("'minimumCompleteness' must be a number between 0 and 1.")
        minimum = float(minimum)

    module = req.module
    if module is not None:
        modules = set(known_modules)
        if not isinstance(module, str) or module not in modules:
            raise ValidationError(f"Unknown module '{module}'. Available: {', '.join(sorted(modules))}.")

    return TranslationRequest(
        data=req.data,
        to_languages=to_languages,
        source=source,
        concurrency_limit=_positive_int(req.concurrencylimit, "concurrencylimit", settings.max_concurrency_limit),
        retry_attempts=_positive_int(req.retryAttempts, "retryAttempts", settings.max_retry_attempts),
        minimum_completeness=minimum,
        module=module,
    )
