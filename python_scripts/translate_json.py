"""
/**
 * @file python_scripts/translate_json.py
 * @description 命令行：把 JSON 文件翻译为多种语言，输出 <name>.<lang>.json。
 */
"""

import argparse
import json
import os
import sys

from polytranslate.config import load_settings
from polytranslate.services import backend_names, resolve_backend_chain, translate_multiple
from polytranslate.services.exceptions import AggregateFailure, ValidationError
from polytranslate.utils import write_json
from polytranslate.utils.validators import validate_translation_request


def main() -> int:
    parser = argparse.ArgumentParser(description="Translate the string values of a JSON object into several languages.")
    parser.add_argument("file", help="input JSON file (flat object)")
    parser.add_argument("--to", nargs="+", required=True, help="target language codes")
    parser.add_argument("-f", "--from", dest="source", default=None, help="source language code or 'auto'")
    parser.add_argument("--module", choices=backend_names(), default=None)
    parser.add_argument("--name", default=None, help="output file prefix (default: input file name)")
    parser.add_argument("--out-dir", default=".")
    parser.add_argument("--concurrencylimit", type=int, default=None)
    parser.add_argument("--retry-attempts", type=int, default=None)
    parser.add_argument("--minimum-completeness", type=float, default=None)
    args = parser.parse_args()

    with open(args.file, "r", encoding="utf-8") as f:
        data = json.load(f)

    payload = {"data": data, "toLanguages": args.to, "module": args.module}
    if args.source:
        payload["from"] = args.source
    if args.concurrencylimit is not None:
        payload["concurrencylimit"] = args.concurrencylimit
    if args.retry_attempts is not None:
        payload["retryAttempts"] = args.retry_attempts
    if args.minimum_completeness is not None:
        payload["minimumCompleteness"] = args.minimum_completeness

    settings = load_settings()
    try:
        req = validate_translation_request(payload, settings, known_modules=backend_names())
        result = translate_multiple(req, resolve_backend_chain(req.module, settings), settings=settings)
    except ValidationError as e:
        sys.stderr.write(f"error: {e.message}\n")
        return 2
    except AggregateFailure as e:
        sys.stderr.write(f"error: {e.message}\n")
        for s in e.suggestions:
            sys.stderr.write(f"  - {s}\n")
        return 1

    name = args.name or os.path.splitext(os.path.basename(args.file))[0]
    os.makedirs(args.out_dir, exist_ok=True)
    for lang, values in result.output.items():
        path = os.path.join(args.out_dir, f"{name}.{lang}.json")
        write_json(path, values)
        sys.stdout.write(f"{lang}: {path}\n")

    sys.stdout.write(json.dumps(result.summary(), ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return 0 if not result.failed_languages else 3


if __name__ == "__main__":
    sys.exit(main())
