"""
Command line entry point.

    canvasoutline board.canvas                 # print outline to stdout
    canvasoutline board.canvas -o board.md     # write outline to a file
    canvasoutline board.canvas --png board.png
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .export import ExportError
from .generator import OutlineGenerator
from .parser import ParseError
from .renderer import DEFAULT_GROUP_LABEL, UNGROUPED_LABEL

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_WRITE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="canvasoutline",
        description="Convert a canvas document into a nested heading/bullet outline.",
    )
    ap.add_argument("canvas", help="path to the canvas JSON file")
    ap.add_argument("-o", "--output", help="write the outline to this file")
    ap.add_argument("--png", help="also render the outline to this PNG file")
    ap.add_argument("--font", help="font name or path for PNG output")
    ap.add_argument(
        "--ungrouped-label",
        default=UNGROUPED_LABEL,
        help=f"heading for elements outside every group (default: {UNGROUPED_LABEL!r})",
    )
    ap.add_argument(
        "--default-group-label",
        default=DEFAULT_GROUP_LABEL,
        help=f"heading for groups without a label (default: {DEFAULT_GROUP_LABEL!r})",
    )
    ap.add_argument("--trace", help="write a debug trace of the run to this file")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    generator = OutlineGenerator(
        default_group_label=args.default_group_label,
        ungrouped_label=args.ungrouped_label,
        font=args.font,
    )
    debug = args.trace is not None

    try:
        outline = generator.generate_from_file(args.canvas, debug=debug)
    except ParseError as exc:
        print(f"[NG] {exc}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    try:
        if args.output:
            generator.save_txt(outline, args.output)
            logger.info("Outline written to %s", args.output)
        else:
            sys.stdout.write(outline)
        if args.png:
            generator.save_png(outline, args.png)
            logger.info("Image written to %s", args.png)
        if debug:
            trace = generator.get_trace()
            try:
                trace.dump_to_file(args.trace)
            except OSError as exc:
                raise ExportError(f"Cannot write trace to '{args.trace}': {exc}") from exc
    except ExportError as exc:
        print(f"[NG] {exc}", file=sys.stderr)
        return EXIT_WRITE_ERROR

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
