"""
/**
 * @file polytranslate/tests/test_settings_merge.py
 * @description 配置合并单元测试。
 */
"""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from polytranslate.config import OrchestratorConfig
from polytranslate.config.settings import Settings, reload_settings


class TestSettingsMerge(unittest.TestCase):
    def test_merge_base_and_local(self):
        with tempfile.TemporaryDirectory() as tmp:
            base_path = os.path.join(tmp, "config.json")
            local_path = os.path.join(tmp, "config.local.json")
            example_path = os.path.join(tmp, "config.example.json")

            with open(base_path, "w") as f:
                json.dump({"translation": {"retry_attempts": 3, "backends": ["google2"]}, "api_keys": {"libretranslate": "a"}}, f)
            with open(local_path, "w") as f:
                json.dump({"translation": {"retry_attempts": 4}, "api_keys": {"libretranslate": "b"}}, f)
            with open(example_path, "w") as f:
                json.dump({}, f)

            s = reload_settings(base_path=base_path, local_path=local_path, example_path=example_path, force=True)
            self.assertEqual(s.retry_attempts, 4)
            self.assertEqual(s.backend_chain, ["google2"])
            with patch.dict(os.environ, {"LIBRETRANSLATE_API_KEY": ""}):
                self.assertEqual(s.resolve_libretranslate_key(), "b")

    def test_example_fills_missing_base(self):
        with tempfile.TemporaryDirectory() as tmp:
            example_path = os.path.join(tmp, "config.example.json")
            with open(example_path, "w") as f:
                json.dump({"translation": {"concurrency_limit": 7}}, f)
            s = reload_settings(
                base_path=os.path.join(tmp, "missing.json"),
                local_path=os.path.join(tmp, "missing.local.json"),
                example_path=example_path,
                force=True,
            )
            self.assertEqual(s.concurrency_limit, 7)

    def test_corrupted_config_keeps_settings(self):
        fd, path = tempfile.mkstemp()
        os.close(fd)
        with open(path, "w") as f:
            f.write("{invalid json")
        s = reload_settings(base_path=path, local_path=path, example_path=path, force=True)
        self.assertIsInstance(s.raw, dict)
        os.remove(path)

    def test_defaults_and_bad_values(self):
        s = Settings(raw={"translation": {"retry_attempts": "many", "fallback_policy": "bogus", "minimum_completeness": 3}})
        self.assertEqual(s.retry_attempts, 2)
        self.assertEqual(s.fallback_policy, "original")
        self.assertEqual(s.minimum_completeness, 1.0)
        self.assertEqual(s.default_from, "auto")
        self.assertEqual(s.concurrency_limit, 3)
        self.assertIn("es", s.supported_languages)

    def test_server_port_from_env(self):
        with patch.dict(os.environ, {"PORT": "8080"}):
            self.assertEqual(Settings(raw={}).server["port"], 8080)

    def test_orchestrator_config_overrides(self):
        base = OrchestratorConfig.from_settings(Settings(raw={"translation": {"concurrency_limit": 5}}))
        self.assertEqual(base.concurrency_limit, 5)
        self.assertIs(base.with_overrides(), base)
        cfg = base.with_overrides(concurrency_limit=2, minimum_completeness=0.5)
        self.assertEqual(cfg.concurrency_limit, 2)
        self.assertEqual(cfg.fallback_policy, "completeness")
        self.assertEqual(cfg.minimum_completeness, 0.5)


if __name__ == "__main__":
    unittest.main()
