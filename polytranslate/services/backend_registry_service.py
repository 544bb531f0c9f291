"""
/**
 * @file polytranslate/services/backend_registry_service.py
 * @description 翻译后端注册表：按配置构造后端并解析有序回退链。
 */
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from polytranslate.config import Settings, load_settings
from polytranslate.services.backends import (
    GoogleBackend,
    JsonttCliBackend,
    LibreTranslateBackend,
    MyMemoryBackend,
    TranslationBackend,
)
from polytranslate.services.backends.google import GOOGLE_TRANSLATE_URL
from polytranslate.services.backends.libretranslate import LIBRETRANSLATE_URL
from polytranslate.services.backends.mymemory import MYMEMORY_URL


def _google(name: str) -> Callable[[Settings], TranslationBackend]:
    def factory(s: Settings) -> TranslationBackend:
        return GoogleBackend(endpoint=s.endpoints.get("google") or GOOGLE_TRANSLATE_URL, name=name)
    return factory


_FACTORIES: Dict[str, Callable[[Settings], TranslationBackend]] = {
    "google": _google("google"),
    "google2": _google("google2"),
    "libre": lambda s: LibreTranslateBackend(
        endpoint=s.endpoints.get("libre") or LIBRETRANSLATE_URL,
        api_key=s.resolve_libretranslate_key(),
    ),
    "mymemory": lambda s: MyMemoryBackend(endpoint=s.endpoints.get("mymemory") or MYMEMORY_URL),
    "jsontt": lambda s: JsonttCliBackend(
        command=s.jsontt.get("command") or "jsontt",
        module=s.jsontt.get("module") or "google2",
    ),
}


def backend_names() -> List[str]:
    return list(_FACTORIES.keys())


def build_backend(name: str, settings: Optional[Settings] = None) -> TranslationBackend:
    s = settings or load_settings()
    if name not in _FACTORIES:
        raise KeyError(f"Unknown translation backend: {name}")
    return _FACTORIES[name](s)


def resolve_backend_chain(module: Optional[str] = None, settings: Optional[Settings] = None) -> List[TranslationBackend]:
    """
    Requested module first, then the configured chain when fallback is enabled.
    """
    s = settings or load_settings()
    configured = [n for n in s.backend_chain if n in _FACTORIES]
    if module:
        names = [module] + (configured if s.fallback_enabled else [])
    else:
        names = configured if s.fallback_enabled else configured[:1]
    if not names:
        names = ["google2"]
    ordered = list(dict.fromkeys(names))
    return [build_backend(n, s) for n in ordered]


def list_available_backends(settings: Optional[Settings] = None) -> Dict[str, List[dict]]:
    s = settings or load_settings()
    backends = [build_backend(name, s).describe() for name in _FACTORIES]
    chain = [n for n in s.backend_chain if n in _FACTORIES]
    return {"backends": backends, "chain": chain, "fallback_enabled": s.fallback_enabled}
