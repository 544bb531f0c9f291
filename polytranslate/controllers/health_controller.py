"""
/**
 * @file polytranslate/controllers/health_controller.py
 * @description 健康检查控制器。
 */
"""

import time

from fastapi import APIRouter

from polytranslate.config import load_settings
from polytranslate.utils import is_writable_dir

router = APIRouter()

_STARTED_AT = time.time()


@router.get("/health")
def health():
    settings = load_settings()
    staging_dir = settings.staging_dir
    fs_status = {
        "staging_dir": staging_dir,
        "staging_dir_writable": is_writable_dir(staging_dir),
    }
    return {
        "status": "ok" if fs_status["staging_dir_writable"] else "degraded",
        "uptime_seconds": round(time.time() - _STARTED_AT, 3),
        "started_at": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(_STARTED_AT)),
        "backends": settings.backend_chain,
        "checks": {"filesystem": fs_status},
    }
