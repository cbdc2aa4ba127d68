"""CLI interface for sensitive-scan.

Usage:
    # Scan text (stdin: plain text, stdout: JSON scan result)
    echo 'card 4111 1111 1111 1111' | sensitive-scan scan

    # Scan and print the text with structured findings masked
    echo 'mail jane@acme.com' | sensitive-scan redact-text

    # Mask a single value for a given type
    sensitive-scan mask --type email jane@acme.com

    # List the registry in priority order
    sensitive-scan rules

Exit status of ``scan`` is 0 unless ``--fail-on-block`` is given and the
result should block, in which case it is 2.
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import create_detector, load_config, load_from_yaml
from .detector import Detector, redact
from .keywords import KEYWORD_RULES
from .masking import mask

DEFAULT_CONFIG = os.environ.get("SENSITIVE_SCAN_CONFIG", "")

EXIT_BLOCKED = 2


def _build_detector(args: argparse.Namespace) -> Detector:
    config = load_from_yaml(args.config) if args.config else load_config({})
    if args.threshold is not None:
        config["block_threshold"] = args.threshold
    if args.skip_types:
        config["skip_types"] |= set(args.skip_types.split(","))
    if args.allow_list:
        config["allow_list"] |= set(args.allow_list.split(","))
    return create_detector(config)


def cmd_scan(args: argparse.Namespace) -> int:
    """Scan plain text on stdin."""
    detector = _build_detector(args)
    result = detector.detect(sys.stdin.read())

    output = result.to_dict()
    if result.skipped_rules:
        output["skippedRules"] = result.skipped_rules
    json.dump(output, sys.stdout, ensure_ascii=False, indent=2 if args.pretty else None)
    sys.stdout.write("\n")

    if args.fail_on_block and result.should_block:
        return EXIT_BLOCKED
    return 0


def cmd_redact_text(args: argparse.Namespace) -> int:
    """Print stdin text with structured findings replaced by display values."""
    detector = _build_detector(args)
    text = sys.stdin.read()
    sys.stdout.write(redact(text, detector.detect(text)))
    return 0


def cmd_mask(args: argparse.Namespace) -> int:
    """Mask one value for a given type."""
    sys.stdout.write(mask(args.type, args.value) + "\n")
    return 0


def cmd_rules(args: argparse.Namespace) -> int:
    """Dump structured and keyword rules as JSON."""
    detector = _build_detector(args)
    output = {
        "structured": [
            {
                "type": r.type_id,
                "severity": r.severity.value,
                "priority": r.priority.name.lower(),
            }
            for r in detector.rules
        ],
        "keywords": [
            {"keyword": k.keyword, "severity": k.severity.value}
            for k in KEYWORD_RULES
        ],
    }
    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sensitive-scan",
        description="Sensitive content detection and risk scoring",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--threshold", type=int, default=None, help="Block threshold (0-100)")
    parser.add_argument("--skip-types", default="", help="Comma-separated type ids to skip")
    parser.add_argument("--allow-list", default="", help="Comma-separated values to never report")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    sub = parser.add_subparsers(dest="command", required=True)
    p_scan = sub.add_parser("scan", help="Scan plain text (stdin)")
    p_scan.add_argument("--pretty", action="store_true", help="Indent JSON output")
    p_scan.add_argument("--fail-on-block", action="store_true",
                        help=f"Exit {EXIT_BLOCKED} when the result should block")
    sub.add_parser("redact-text", help="Mask findings in plain text (stdin)")
    p_mask = sub.add_parser("mask", help="Mask a single value")
    p_mask.add_argument("--type", required=True, help="Type id, e.g. email")
    p_mask.add_argument("value")
    sub.add_parser("rules", help="List detection rules")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "scan": cmd_scan,
        "redact-text": cmd_redact_text,
        "mask": cmd_mask,
        "rules": cmd_rules,
    }
    return cmds[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
