import re
import sys
import time
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

from mandel import (
    ImageBounds,
    PlaneWindow,
    default_workers,
    new_pixel_buffer,
    parse_pair,
    render_parallel,
    write_image,
)

VERBOSE = False

# Corner points such as "-1.20,0.35" start with a minus sign but are values.
_NEGATIVE_VALUE = re.compile(r"^-\.?\d")


def log(template, *values):
    if VERBOSE:
        print(template % values if values else template, flush=True)


@dataclass(frozen=True)
class PlotConfig:
    output: Path
    bounds: ImageBounds
    window: PlaneWindow
    workers: int
    rows_per_band: int
    image_format: str | None
    verbose: bool


def build_parser():
    parser = ArgumentParser(
        usage='%(prog)s [options] FILE PIXELS UPPERLEFT LOWERRIGHT',
        description='Plot the Mandelbrot set as a grayscale image. '
                    'FILE is the output image, PIXELS the image size as WIDTHxHEIGHT, '
                    'UPPERLEFT and LOWERRIGHT the plane corners as REAL,IMAG.',
        epilog='Example: %(prog)s mandel.png 1000x750 -1.20,0.35 -1,0.20',
    )

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of worker threads (default: number of CPUs)',
                        metavar='WORKERS', default=None)

    parser.add_argument('--rows-per-band', type=int,
                        dest='rows_per_band', help='image rows rendered by each task',
                        metavar='ROWS', default=1)

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for the image. Any format supported by Pillow; '
                                            'inferred from the FILE extension by default.',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Report the render settings and timing.')

    return parser


def parse_arguments(argv=None) -> PlotConfig:
    parser = build_parser()
    opt, positionals = parser.parse_known_args(argv)

    unknown = [arg for arg in positionals if arg.startswith('-') and not _NEGATIVE_VALUE.match(arg)]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    if len(positionals) != 4:
        parser.error(f"expected 4 arguments (FILE PIXELS UPPERLEFT LOWERRIGHT), got {len(positionals)}.")

    output, pixels, upper_left_arg, lower_right_arg = positionals

    dimensions = parse_pair(pixels, 'x', int)
    if dimensions is None:
        parser.error(f"error parsing image dimensions '{pixels}'.")
    upper_left = parse_pair(upper_left_arg, ',', float)
    if upper_left is None:
        parser.error(f"error parsing upper left corner point '{upper_left_arg}'.")
    lower_right = parse_pair(lower_right_arg, ',', float)
    if lower_right is None:
        parser.error(f"error parsing lower right corner point '{lower_right_arg}'.")

    try:
        bounds = ImageBounds(*dimensions)
    except ValueError as exc:
        parser.error(f"invalid image dimensions: {exc}")
    try:
        window = PlaneWindow(upper_left, lower_right)
    except ValueError as exc:
        parser.error(f"invalid plane window: {exc}")

    workers = opt.workers if opt.workers is not None else default_workers()
    if workers < 1:
        parser.error("--workers must be at least 1.")
    if opt.rows_per_band < 1:
        parser.error("--rows-per-band must be at least 1.")

    return PlotConfig(
        output=Path(output),
        bounds=bounds,
        window=window,
        workers=workers,
        rows_per_band=opt.rows_per_band,
        image_format=opt.format,
        verbose=bool(opt.verbose),
    )


def main(argv=None):
    config = parse_arguments(argv)

    global VERBOSE
    VERBOSE = config.verbose

    bounds = config.bounds
    window = config.window
    log("Image: %dx%d pixels", bounds.width, bounds.height)
    log("Plane: (%r, %r) to (%r, %r)", *window.upper_left, *window.lower_right)
    band_count = -(-bounds.height // config.rows_per_band)
    log("Rendering %d bands on %d workers", band_count, config.workers)

    pixels = new_pixel_buffer(bounds)
    start = time.perf_counter()
    render_parallel(pixels, bounds, window, workers=config.workers, rows_per_band=config.rows_per_band)
    log("%d ms", round((time.perf_counter() - start) * 1000))

    try:
        written = write_image(config.output, pixels, bounds, config.image_format)
    except (OSError, ValueError, KeyError) as exc:
        sys.exit(f"error writing image file: {exc}")
    log("Wrote %s", written)


if __name__ == '__main__':
    main()
