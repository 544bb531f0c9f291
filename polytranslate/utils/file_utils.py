"""
/**
 * @file polytranslate/utils/file_utils.py
 * @description 文件处理工具：请求级临时暂存目录与 JSON 读写。
 */
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)

STAGING_PREFIX = "translate-"


def safe_dir_name(name: str) -> str:
    value = (name or "").strip()
    if not value:
        return "default"
    invalid = '<>:"/\\\\|?*'
    cleaned = "".join("_" if c in invalid else c for c in value)
    cleaned = cleaned.strip().strip(".")
    return cleaned or "default"


def new_staging_id() -> str:
    return uuid.uuid4().hex


@contextmanager
def staging_area(base_dir: Optional[str] = None, request_id: Optional[str] = None) -> Iterator[str]:
    """
    Create ``<base_dir>/translate-<id>`` and remove it on every exit path.
    """
    base = os.path.abspath(base_dir or tempfile.gettempdir())
    os.makedirs(base, exist_ok=True)
    path = os.path.join(base, STAGING_PREFIX + safe_dir_name(request_id or new_staging_id()))
    os.makedirs(path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        if os.path.exists(path):
            logger.warning(f"Staging area {path} could not be removed")


def write_json(path: str, value: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(value, f, ensure_ascii=False, indent=2)


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def is_writable_dir(path: str) -> bool:
    return os.path.isdir(path) and os.access(path, os.W_OK)
