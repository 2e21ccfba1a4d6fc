"""
Command-line interface: build a helix from a sequence and export it.

Usage:
    python -m polystrand.cli --sequence ACGUACGU --type RNA --double --out output/
    python -m polystrand.cli --sequence GATTACA --config build.yaml
"""

import argparse
import sys
from pathlib import Path

from .config.settings import BuildConfig, apply_logging_config, load_config
from .managers.export.export_manager import ExportManager
from .managers.strand_edit_manager import StrandEditManager
from .models.system import System


def build_parser():
    parser = argparse.ArgumentParser(
        description="Build an ideal DNA/RNA helix from a sequence and export it"
    )
    parser.add_argument(
        "--sequence", "-s",
        type=str,
        required=True,
        help="Sequence of the strand, 5' to 3'"
    )
    parser.add_argument(
        "--type", "-t",
        choices=["DNA", "RNA"],
        default="DNA",
        help="Nucleic acid type (default: DNA)"
    )
    parser.add_argument(
        "--double", "-d",
        action="store_true",
        help="Also build the complementary strand"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--out", "-o",
        type=Path,
        default=None,
        help="Output directory (overrides config)"
    )
    parser.add_argument(
        "--name", "-n",
        type=str,
        default=None,
        help="Base name of exported files (overrides config)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress output except errors"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else BuildConfig()
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    apply_logging_config(config.logging)

    out_dir = args.out or Path(config.export.out_dir)
    base_name = args.name or config.export.base_name

    system = System()
    editor = StrandEditManager(system, config)
    try:
        result = editor.create_strand_from_sequence(
            args.sequence, nucleic_type=args.type, double=args.double
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    request = f"export_request {','.join(config.export.strategies)} {out_dir} {base_name}"
    folder = ExportManager(config.export).handle_export_request([system], request)

    if not args.quiet:
        print(f"Built {args.type} strand: {result.elements[0].strand.get_sequence()}")
        if result.complement is not None:
            print(f"  Complement: {result.complement.get_sequence()}")
        print(f"  Elements: {len(system.get_elements())}")
        print(f"Output folder: {folder}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
