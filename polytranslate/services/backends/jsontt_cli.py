"""
/**
 * @file polytranslate/services/backends/jsontt_cli.py
 * @description jsontt 命令行后端：通过请求级暂存目录中的 JSON 文件交换数据。
 */
"""

from __future__ import annotations

import logging
import os
import subprocess
from contextlib import nullcontext
from typing import List, Optional

from polytranslate.services.exceptions import BackendInvocationError
from polytranslate.utils.file_utils import new_staging_id, read_json, staging_area, write_json

from .base import TranslateOptions, TranslationBackend

logger = logging.getLogger(__name__)

INPUT_FILE = "input.json"
VALUE_KEY = "value"


class JsonttCliBackend(TranslationBackend):
    name = "jsontt"
    description = "jsontt command-line translator via staged JSON files"
    requires_staging = True

    def __init__(self, command: str = "jsontt", module: str = "google2"):
        self.command = command
        self.module = module

    def build_command(self, source: str, target: str, name: str) -> List[str]:
        return [
            self.command, INPUT_FILE,
            "--module", self.module,
            "-f", source or "auto",
            "--to", target,
            "--name", name,
            "--fallback", "no",
        ]

    def translate(self, text: str, source: str, target: str, options: Optional[TranslateOptions] = None) -> str:
        opts = options or TranslateOptions()
        # Without a request-scoped area, the call owns a throwaway one.
        scope = nullcontext(opts.staging_dir) if opts.staging_dir else staging_area()
        with scope as base:
            attempt_id = new_staging_id()
            workdir = os.path.join(base, attempt_id)
            os.makedirs(workdir)
            write_json(os.path.join(workdir, INPUT_FILE), {VALUE_KEY: text})
            name = f"out-{attempt_id}"
            cmd = self.build_command(source, target, name)
            logger.debug(f"[{self.name}] running {' '.join(cmd)} in {workdir}")
            try:
                proc = subprocess.run(cmd, cwd=workdir, capture_output=True, text=True, timeout=opts.timeout)
            except subprocess.TimeoutExpired as e:
                raise BackendInvocationError(f"Timed out after {opts.timeout}s", backend=self.name) from e
            except OSError as e:
                raise BackendInvocationError(f"Command execution failed: {e}", backend=self.name) from e
            if proc.returncode != 0:
                raise BackendInvocationError(
                    f"Command exited with {proc.returncode}: {(proc.stderr or '').strip()[:200]}", backend=self.name
                )
            if proc.stderr:
                logger.warning(f"[{self.name}] stderr: {proc.stderr.strip()[:200]}")

            output_path = os.path.join(workdir, f"{name}.{target}.json")
            if not os.path.exists(output_path):
                raise BackendInvocationError(f"Output file not found: {os.path.basename(output_path)}", backend=self.name)
            try:
                result = read_json(output_path)
            except ValueError as e:
                raise BackendInvocationError("Malformed output file", backend=self.name) from e
            value = result.get(VALUE_KEY) if isinstance(result, dict) else None
            if not isinstance(value, str):
                raise BackendInvocationError("Output file has no translated value", backend=self.name)
            return value
