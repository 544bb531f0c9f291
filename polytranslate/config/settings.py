"""
/**
 * @file polytranslate/config/settings.py
 * @description 后端配置加载与合并（config.json + config.local.json）。
 */
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(REPO_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(REPO_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(REPO_ROOT, "config.example.json")

DEFAULT_SUPPORTED_LANGUAGES = [
    "af", "am", "ar", "az", "be", "bg", "bn", "bs", "ca", "cs", "cy", "da", "de", "el",
    "en", "eo", "es", "et", "eu", "fa", "fi", "fr", "ga", "gl", "gu", "ha", "he", "hi",
    "hr", "ht", "hu", "hy", "id", "ig", "is", "it", "ja", "jv", "ka", "kk", "km", "kn",
    "ko", "ku", "ky", "la", "lb", "lo", "lt", "lv", "mg", "mi", "mk", "ml", "mn", "mr",
    "ms", "mt", "my", "ne", "nl", "no", "ny", "pa", "pl", "ps", "pt", "ro", "ru", "sd",
    "si", "sk", "sl", "sm", "sn", "so", "sq", "sr", "st", "su", "sv", "sw", "ta", "te",
    "tg", "th", "tl", "tr", "uk", "ur", "uz", "vi", "xh", "yi", "yo", "zh", "zh-CN",
    "zh-TW", "zu",
]
DEFAULT_SENTINELS = ["--", "[error]"]
FALLBACK_POLICIES = ("original", "error", "completeness")


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _as_int(value: Any, default: int, minimum: int = 0) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return default
    return v if v >= minimum else default


def _as_float(value: Any, default: float, minimum: float = 0.0) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return default
    return v if v >= minimum else default


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        value = self.raw.get(name, {})
        return value if isinstance(value, dict) else {}

    @property
    def translation(self) -> Dict[str, Any]:
        return self._section("translation")

    @property
    def endpoints(self) -> Dict[str, str]:
        return self._section("endpoints")

    @property
    def api_keys(self) -> Dict[str, str]:
        return self._section("api_keys")

    @property
    def jsontt(self) -> Dict[str, Any]:
        return self._section("jsontt")

    @property
    def server(self) -> Dict[str, Any]:
        value = self._section("server")
        return {
            "host": os.getenv("HOST") or value.get("host") or "0.0.0.0",
            "port": _as_int(os.getenv("PORT") or value.get("port"), 3000, minimum=1),
        }

    @property
    def supported_languages(self) -> List[str]:
        value = self.translation.get("supported_languages")
        if isinstance(value, list) and value:
            return [str(x) for x in value]
        return list(DEFAULT_SUPPORTED_LANGUAGES)

    @property
    def default_from(self) -> str:
        value = self.translation.get("default_from")
        return value if isinstance(value, str) and value else "auto"

    @property
    def concurrency_limit(self) -> int:
        return _as_int(self.translation.get("concurrency_limit"), 3, minimum=1)

    @property
    def max_concurrency_limit(self) -> int:
        return _as_int(self.translation.get("max_concurrency_limit"), 16, minimum=1)

    @property
    def retry_attempts(self) -> int:
        return _as_int(self.translation.get("retry_attempts"), 2, minimum=1)

    @property
    def max_retry_attempts(self) -> int:
        return _as_int(self.translation.get("max_retry_attempts"), 5, minimum=1)

    @property
    def retry_delay(self) -> float:
        return _as_float(self.translation.get("retry_delay"), 0.5)

    @property
    def attempt_timeout(self) -> float:
        return _as_float(self.translation.get("attempt_timeout"), 15.0, minimum=0.1)

    @property
    def minimum_completeness(self) -> float:
        v = _as_float(self.translation.get("minimum_completeness"), 0.8)
        return min(v, 1.0)

    @property
    def completeness_rounds(self) -> int:
        return _as_int(self.translation.get("completeness_rounds"), 1)

    @property
    def fallback_policy(self) -> str:
        value = self.translation.get("fallback_policy")
        return value if value in FALLBACK_POLICIES else "original"

    @property
    def fallback_enabled(self) -> bool:
        return bool(self.translation.get("fallback_enabled", True))

    @property
    def backend_chain(self) -> List[str]:
        value = self.translation.get("backends")
        if isinstance(value, list) and value:
            return [str(x) for x in value]
        return ["google2", "mymemory"]

    @property
    def sentinels(self) -> List[str]:
        value = self.translation.get("sentinels")
        if isinstance(value, list):
            return [str(x) for x in value]
        return list(DEFAULT_SENTINELS)

    @property
    def staging_dir(self) -> str:
        env = os.getenv("POLYTRANSLATE_STAGING_DIR")
        if env:
            return env
        value = self.jsontt.get("staging_dir")
        if isinstance(value, str) and value:
            return value
        return tempfile.gettempdir()

    def resolve_libretranslate_key(self) -> Optional[str]:
        return os.getenv("LIBRETRANSLATE_API_KEY") or (
            self.api_keys.get("libretranslate") if isinstance(self.api_keys.get("libretranslate"), str) else None
        )


import time
import logging
import threading
import hashlib

logger = logging.getLogger("config_loader")

_CACHED_SETTINGS = None
_LAST_LOAD_TIME = 0
_CONFIG_HASH = ""
_SETTINGS_LOCK = threading.Lock()


def _deep_diff(d1: Dict[str, Any], d2: Dict[str, Any], path="") -> list:
    diffs = []
    for k in set(d1.keys()) | set(d2.keys()):
        p = f"{path}.{k}" if path else k
        if k not in d1:
            diffs.append(f"Added: {p}")
        elif k not in d2:
            diffs.append(f"Removed: {p}")
        elif isinstance(d1[k], dict) and isinstance(d2[k], dict):
            diffs.extend(_deep_diff(d1[k], d2[k], p))
        elif d1[k] != d2[k]:
            diffs.append(f"Changed: {p} ({d1[k]} -> {d2[k]})")
    return diffs


def reload_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
    force: bool = False,
) -> Settings:
    global _CACHED_SETTINGS, _LAST_LOAD_TIME, _CONFIG_HASH

    with _SETTINGS_LOCK:
        now = time.time()
        # Debounce: 500ms
        if _CACHED_SETTINGS and not force and (now - _LAST_LOAD_TIME < 0.5):
            return _CACHED_SETTINGS

        try:
            base_cfg = _load_json(base_path)
            if not base_cfg.get("translation") and os.path.exists(example_path):
                base_cfg = _merge_dicts(_load_json(example_path), base_cfg)

            local_cfg = _load_json(local_path)
            merged = _merge_dicts(base_cfg, local_cfg)

            # Sort keys to ensure consistent hash for same content
            new_hash = hashlib.md5(json.dumps(merged, sort_keys=True).encode("utf-8")).hexdigest()

            if _CACHED_SETTINGS and new_hash == _CONFIG_HASH:
                _LAST_LOAD_TIME = now
                return _CACHED_SETTINGS

            is_reload = _CACHED_SETTINGS is not None
            if is_reload:
                diffs = _deep_diff(_CACHED_SETTINGS.raw, merged)
                if diffs:
                    logger.info(f"Config changes detected: {'; '.join(diffs)}")

            _CACHED_SETTINGS = Settings(raw=merged)
            _CONFIG_HASH = new_hash
            _LAST_LOAD_TIME = now

            if is_reload:
                logger.info("Configuration reloaded successfully.")

        except Exception as e:
            logger.error(f"Failed to reload config: {e}. Keeping old config.")
            if not _CACHED_SETTINGS:
                logger.warning("Initializing with empty settings due to load failure.")
                _CACHED_SETTINGS = Settings(raw={})

    return _CACHED_SETTINGS


def load_settings() -> Settings:
    """
    Get current settings. Lazy loads on first call.
    Subsequent reloads are handled by the file watcher calling reload_settings().
    """
    if _CACHED_SETTINGS is None:
        return reload_settings()
    return _CACHED_SETTINGS
