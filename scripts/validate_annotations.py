#!/usr/bin/env python3
"""Validate an external annotation set against a document on disk."""

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from annocheck.diagnostics.log import ComparisonLog
from annocheck.validation import validate_files

logger = logging.getLogger("validate_annotations")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("annotation_set", help="Annotation set JSON file")
    parser.add_argument("document", help="Document to validate against (.docx or plain text)")
    parser.add_argument("--output", "-o", help="Write the validation result JSON here")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    log = ComparisonLog()
    result = validate_files(args.annotation_set, args.document, log)

    for entry in log.entries:
        print(entry)

    if args.output:
        Path(args.output).write_text(result.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Result written to %s", args.output)

    if result.is_valid:
        logger.info("Annotation set is valid")
        return 0
    logger.warning(
        "Annotation set is invalid (hash mismatch: %s, %d issues)",
        result.hash_mismatch, len(result.issues),
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
