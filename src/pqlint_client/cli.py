from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pqlint_client.clients import SUPPORTED_FORMATS, InvalidArgumentError, build_clients
from pqlint_client.config import ConfigError, load_config, resolve_subscription_key
from pqlint_client.http import ApiError
from pqlint_client.models import LintResultItem

logger = logging.getLogger(__name__)

ERROR_SEVERITY = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pqlint",
        description="Lint Power Query M and TMDL code with the PQLint API",
    )
    parser.add_argument("--config", default=None, help="JSON file with client settings")
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("rules", help="List the rules known to the service")

    lint_parser = subparsers.add_parser("lint", help="Lint one or more files")
    lint_parser.add_argument("files", nargs="+")
    lint_parser.add_argument("--subscription-key", default=None)
    lint_parser.add_argument("--format", choices=list(SUPPORTED_FORMATS), default=None)
    lint_parser.add_argument("--rule", dest="rules", action="append", default=[])
    lint_parser.add_argument("--severity", default=None)
    lint_parser.add_argument("--output", default=None)
    lint_parser.add_argument("--fail-on-severity", type=int, default=ERROR_SEVERITY)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_config(args.config)
    except ConfigError as exc:
        parser.error(str(exc))
        return 2

    rule_client, lint_client = build_clients(settings)

    if args.command == "rules":
        try:
            rules = rule_client.list_rules()
        except ApiError as exc:
            print(exc.message, file=sys.stderr)
            return 1
        print(json.dumps([rule.to_dict() for rule in rules], indent=2, ensure_ascii=True))
        return 0

    if args.command == "lint":
        subscription_key = resolve_subscription_key(settings, args.subscription_key)
        report: list[dict] = []
        failed = False
        try:
            for file_name in args.files:
                path = Path(file_name)
                code = path.read_text(encoding="utf-8")
                results = lint_client.lint(
                    code,
                    subscription_key or "",
                    rule_ids=args.rules,
                    severity=args.severity,
                    format=args.format or _infer_format(path),
                )
                failed = failed or _meets_threshold(results, args.fail_on_severity)
                report.append(
                    {"file": str(path), "results": [item.to_dict() for item in results]}
                )
        except (ApiError, InvalidArgumentError, OSError) as exc:
            print(str(exc), file=sys.stderr)
            return 1

        text = json.dumps(report, indent=2, ensure_ascii=True)
        if args.output:
            output = Path(args.output)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text + "\n", encoding="utf-8")
        print(text)
        return 1 if failed else 0

    parser.error(f"Unsupported command: {args.command}")
    return 2


def _infer_format(path: Path) -> str:
    return "tmdl" if path.suffix.lower() == ".tmdl" else "pq"


def _meets_threshold(results: list[LintResultItem], threshold: int) -> bool:
    hit = False
    for item in results:
        level = item.severity_level
        if level is None:
            # unreadable severity fails the gate rather than passing unseen
            logger.warning("%s has unrecognized severity %r", item.id, item.severity)
            hit = True
        elif level >= threshold:
            logger.warning("%s (%s) at severity %d", item.name or item.id, item.id, level)
            hit = True
    return hit


if __name__ == "__main__":
    raise SystemExit(main())
