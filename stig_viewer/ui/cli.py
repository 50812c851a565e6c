"""Command-line interface and main entry point."""

from __future__ import annotations
from typing import List, Optional
from pathlib import Path
import argparse
import logging
import sys

from stig_viewer.controls.cci import load_cci_map
from stig_viewer.core.config import Cfg
from stig_viewer.core.constants import APP_NAME, VERSION
from stig_viewer.core.logging import LOG
from stig_viewer.exceptions import STIGError
from stig_viewer.models.stig import AssetInfo
from stig_viewer.processor.processor import (
    DIFF_FORMATS,
    POAM_FORMATS,
    STATS_FORMATS,
    Proc,
    dump_json,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stig-viewer",
        description=f"{APP_NAME} v{VERSION}",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--cci-map", metavar="FILE",
                        help="JSON CCI → 800-53 control table (default: built-in, or $STIG_VIEWER_CCI_MAP)")

    convert_group = parser.add_argument_group("Export CKL")
    convert_group.add_argument("--convert", metavar="SRC", help="XCCDF or CKL file to export as CKL")
    convert_group.add_argument("--out", help="Output path (default: export directory)")

    asset_group = parser.add_argument_group("Asset Information")
    asset_group.add_argument("--host", default="", help="Asset host name")
    asset_group.add_argument("--ip", default="", help="Asset IP")
    asset_group.add_argument("--mac", default="", help="Asset MAC")
    asset_group.add_argument("--fqdn", default="", help="Asset FQDN")

    poam_group = parser.add_argument_group("Export POAM")
    poam_group.add_argument("--poam", metavar="SRC", help="XCCDF or CKL file to export findings from")
    poam_group.add_argument("--poam-format", choices=POAM_FORMATS, default="csv",
                            help="POAM output format (default: csv)")
    poam_group.add_argument("--include-not-reviewed", action="store_true",
                            help="Also export rules that have not been reviewed")

    diff_group = parser.add_argument_group("Compare STIG Versions")
    diff_group.add_argument("--diff", nargs=2, metavar=("OLD", "NEW"), help="Compare two STIGs")
    diff_group.add_argument("--diff-format", choices=DIFF_FORMATS, default="summary",
                            help="Diff output format (default: summary)")

    stats_group = parser.add_argument_group("Review Statistics")
    stats_group.add_argument("--stats", metavar="SRC", help="Show review statistics")
    stats_group.add_argument("--stats-format", choices=STATS_FORMATS, default="text",
                             help="Statistics output format (default: text)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments (None = sys.argv)

    Returns:
        Exit code (0 = success)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        LOG.set_level(logging.DEBUG)

    ok, err_list = Cfg.check()
    if not ok:
        for err in err_list:
            print(f"ERROR: {err}", file=sys.stderr)
        return 1

    try:
        cci_file = args.cci_map or Cfg.cci_map_file()
        proc = Proc(load_cci_map(cci_file) if cci_file else None)
        asset = AssetInfo(hostname=args.host, ip=args.ip, mac=args.mac, fqdn=args.fqdn)

        if args.convert:
            result = proc.to_ckl(args.convert, args.out, asset)
            print(dump_json(result))
            return 0

        if args.poam:
            result = proc.to_poam(
                args.poam,
                args.out,
                asset,
                fmt=args.poam_format,
                include_not_reviewed=args.include_not_reviewed,
            )
            print(dump_json(result))
            return 0

        if args.diff:
            path_a, path_b = args.diff
            diff = proc.diff(path_a, path_b)
            if args.diff_format == "json":
                print(dump_json(diff.as_dict()))
            else:
                print(Proc.format_diff_summary(diff, Path(path_a).name, Path(path_b).name))
            return 0

        if args.stats:
            stig, stats = proc.stats(args.stats)
            if args.stats_format == "json":
                print(dump_json({"title": stig.title, **stats.as_dict()}))
            else:
                print(Proc.format_stats_text(stig, stats, Path(args.stats).name))
            return 0

        parser.print_help()
        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except STIGError as exc:
        LOG.e(f"Fatal error: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
