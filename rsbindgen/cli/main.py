"""Main CLI entry point for rsbindgen"""

import sys
import argparse
import traceback
from pathlib import Path
from typing import List, Optional

import yaml

from rsbindgen.core.comment_loader import load_translation_unit
from rsbindgen.core.directive_logger import DirectiveLogger
from rsbindgen.core.options import ReportOptions
from rsbindgen.generators.report_generator import ReportGenerator
from rsbindgen.ir.item import TypeDescriptor, collect_items


def annotate_file(input_file: Path, logger: Optional[DirectiveLogger] = None) -> List[TypeDescriptor]:
    """Scan every declaration of a translation unit dump

    Args:
        input_file: Path to the YAML dump
        logger: Optional directive logger

    Returns:
        Type descriptors in file order

    Raises:
        FileNotFoundError: If input_file doesn't exist
        ValueError: If the dump is malformed
        yaml.YAMLError: If the dump is not valid YAML
    """
    cursors = load_translation_unit(input_file)
    return collect_items(cursors, logger)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract rustbindgen directives from documentation comments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Directives are written in documentation comments as:
  /** <div rustbindgen opaque replaces="Bar" accessor="unsafe"></div> */
"""
    )
    parser.add_argument(
        "input",
        type=Path,
        help="YAML dump of the parsed translation unit"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Write the report to this file instead of stdout"
    )
    parser.add_argument(
        "--format",
        choices=["text", "yaml"],
        help="Report format (default: text)"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Include items without directives"
    )
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set a report option (format, include_unannotated, show_fields)"
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        help="Load report options from YAML config file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print a directive summary to stderr"
    )

    args = parser.parse_args(argv)

    options = ReportOptions()
    if args.config_file:
        try:
            options.load_from_yaml(args.config_file)
        except yaml.YAMLError as e:
            print(f"Error: Invalid config file {args.config_file}: {e}", file=sys.stderr)
            return 1
    if args.option:
        options.load_from_cli(args.option)
    if args.format:
        options.set("format", args.format)
    if args.all:
        options.include_unannotated = True

    logger = DirectiveLogger()
    try:
        items = annotate_file(args.input, logger)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception:
        print(f"Error scanning {args.input}:", file=sys.stderr)
        traceback.print_exc()
        return 1

    report = ReportGenerator(options).generate(items)

    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(report)
                if report and not report.endswith("\n"):
                    f.write("\n")
        except OSError as e:
            print(f"Error writing output file {args.output}: {e}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"Generated: {args.output}", file=sys.stderr)
    elif report:
        print(report.rstrip("\n"))

    if args.verbose:
        print(logger.print_summary(), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
