import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from preimage2d import (
    GridCurve,
    PreimageConfig,
    generate_tikz_document,
    longest_straight_run,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Recognize the longest digital straight run of a grid curve"
    )
    parser.add_argument("path", help="Path to a file of 'x y' curve vertices")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="Index of the edge the recognition starts from (default: 0)",
    )
    parser.add_argument(
        "--backward",
        action="store_true",
        help="Extend towards the beginning of the curve instead of its end",
    )
    parser.add_argument(
        "--arithmetic",
        choices=["int", "int64"],
        default="int",
        help="Integer arithmetic used by the orientation predicate (default: int)",
    )
    parser.add_argument(
        "--check-invariants",
        action="store_true",
        help="Validate the preimage chains after every extension",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document of the recognized run to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Reading curve from %s", args.path)
    curve = GridCurve.from_file(args.path)
    pairs = list(curve.incident_points())
    if not pairs:
        logger.error("Curve %s has no edges", args.path)
        raise SystemExit(1)
    if not 0 <= args.start < len(pairs):
        logger.error("Start index %d outside of [0, %d)", args.start, len(pairs))
        raise SystemExit(1)

    config = PreimageConfig(arithmetic=args.arithmetic, check_invariants=args.check_invariants)
    preimage = longest_straight_run(
        pairs, start=args.start, backward=args.backward, config=config
    )

    if args.backward:
        recognized = pairs[args.start - preimage.size + 1 : args.start + 1]
    else:
        recognized = pairs[args.start : args.start + preimage.size]

    print(f"Edges: {len(pairs)}")
    print(f"Recognized: {preimage.size}")
    print("Inner leaning points:")
    for point in preimage.inner_hull:
        print(f"  {point}")
    print("Outer leaning points:")
    for point in preimage.outer_hull:
        print(f"  {point}")
    line = preimage.separating_line()
    print(f"Separating line: {line}")
    slope = line.slope()
    if slope is not None:
        print(f"  slope: {slope}")
        print(f"  intercept: {line.intercept()}")

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        output_path.write_text(generate_tikz_document(recognized, preimage), encoding="utf-8")
        print(f"TikZ document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
