"""Command line front-end: ``sdf2urdf -f model.sdf [-o model.urdf]``."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sdf2urdf.config import ConversionOptions, load_options
from sdf2urdf.converter import convert_file
from sdf2urdf.errors import Sdf2UrdfError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdf2urdf",
        description="Convert an SDF model into a URDF robot description",
    )
    parser.add_argument("-f", "--file", help="SDF file to convert to URDF")
    parser.add_argument("-o", "--out", help="Output filename (default: standard output)")
    parser.add_argument("--config", help="YAML file with conversion options")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Fail when a joint references an unknown link")
    parser.add_argument("--precision", type=int, help="Significant digits for numbers")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if not args.file:
        logger.error("Specify a file to convert with the -f option")
        return 1

    try:
        options = load_options(args.config) if args.config else ConversionOptions()
        overrides = {}
        if args.strict is not None:
            overrides["strict"] = args.strict
        if args.precision is not None:
            overrides["precision"] = args.precision
        if overrides:
            options = options.replace(**overrides)

        result = convert_file(args.file, options)
    except Sdf2UrdfError as e:
        logger.error("Unable to convert file [%s]: %s", args.file, e)
        return 1

    # Output to file, if specified. Otherwise output to screen
    if args.out:
        out_path = Path(args.out)
        try:
            out_path.write_text(result.urdf, encoding="utf-8")
        except OSError as e:
            logger.error("Cannot write %s: %s", out_path, e)
            return 1
        logger.info("Wrote %s", out_path)
    else:
        sys.stdout.write(result.urdf)

    return 0


if __name__ == "__main__":
    sys.exit(main())
