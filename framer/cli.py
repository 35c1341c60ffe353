from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from framer.canvas.pipeline import run_frame_job
from framer.config import settings
from framer.errors import FramerError
from framer.log import configure_logging
from framer.schemas import FrameRequest
from framer.storage.local import load_rgba

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="framer",
        description="Frame an image with a background, rounded corners and a drop shadow.",
    )
    ap.add_argument("input", help="input image file")
    ap.add_argument("-o", "--output", default="output.png", help="output file (default: output.png)")
    ap.add_argument("-s", "--scale", type=float, default=settings.default_scale, help="scale percentage")
    ap.add_argument(
        "-b",
        "--background",
        default=settings.default_background,
        help="colr:<color>, grad:<c1-c2...> or imag:<path>",
    )
    ap.add_argument("-r", "--ratio", default=None, help="target aspect ratio, e.g. 16:9")
    ap.add_argument("--roundness", type=float, default=0.0, help="corner radius percentage (0-100)")
    ap.add_argument("--offset", default="0,0", help="image offset in pixels, x right / y up")
    ap.add_argument("--shadow-offset", default=None, help="shadow offset in pixels; enables the shadow")
    ap.add_argument("--shadow-color", default=settings.default_shadow_color)
    ap.add_argument("--shadow-radius", type=float, default=settings.default_shadow_radius)
    ap.add_argument("--shadow-opacity", type=float, default=settings.default_shadow_opacity)
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        request = FrameRequest(
            scale=args.scale,
            background=args.background,
            ratio=args.ratio,
            roundness=args.roundness,
            offset=args.offset,
            shadow_offset=args.shadow_offset,
            shadow_color=args.shadow_color,
            shadow_radius=args.shadow_radius,
            shadow_opacity=args.shadow_opacity,
        )
    except ValidationError as exc:
        logger.error("invalid arguments: %s", exc)
        return 1

    logger.info("processing image: %s", args.input)
    try:
        options = request.to_options(load_rgba)
        run_frame_job(args.input, args.output, options)
    except FramerError as exc:
        logger.error("failed to process image: %s", exc)
        return 1

    print(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
