#!/usr/bin/env python3
"""
Level Verification Tool

Regenerates every level in a range and reports structural errors,
duplicate node sets, and per-tier difficulty averages. Findings are
reported, not enforced: the exit code is 0 unless --strict is given.

Usage:
    python3 verify_levels.py [--start N] [--end N] [--strict] [--output FILE] [--verbose]

Examples:
    python3 verify_levels.py
    python3 verify_levels.py --start 101 --end 200
    python3 verify_levels.py --strict
    python3 verify_levels.py --output report.json
"""

import sys
import json
import argparse
import logging
from dataclasses import asdict

from onestroke.config import get_settings
from onestroke.core.verifier import LevelVerifier, format_report


def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Verify generated levels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--start",
        type=int,
        default=1,
        help="First level id (default: 1)"
    )
    parser.add_argument(
        "--end",
        type=int,
        default=settings.verify_range_end,
        help=f"Last level id (default: {settings.verify_range_end})"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if anything was flagged"
    )
    parser.add_argument(
        "--output",
        help="Also write the report as JSON to this file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log generator activity"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.start < 1 or args.end < args.start:
        print(f"\n❌ Error: invalid level range {args.start}-{args.end}")
        return 1

    report = LevelVerifier().verify(args.start, args.end)
    print(format_report(report))

    if args.output:
        output_data = {
            "start_id": report.start_id,
            "end_id": report.end_id,
            "generated": report.generated,
            "metrics": [m.to_dict() for m in report.metrics],
            "duplicates": [list(pair) for pair in report.duplicates],
            "findings": [asdict(f) for f in report.findings],
            "checks": report.checks,
        }
        with open(args.output, "w") as f:
            json.dump(output_data, f, indent=2)
        print(f"\nReport saved to: {args.output}")

    if report.ok:
        print("\n🎉 VERIFICATION COMPLETE")
        return 0

    print(f"\n⚠️  VERIFICATION COMPLETE WITH {len(report.findings)} FINDINGS")
    return 1 if args.strict else 0


if __name__ == "__main__":
    sys.exit(main())
