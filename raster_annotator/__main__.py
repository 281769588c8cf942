"""Command-line entry point.

Usage::

    python -m raster_annotator scene.tif [--band 2] > polygons.geojson

Opens the annotation window on the raster and, once the window is
closed, writes the saved polygons to stdout as a GeoJSON
FeatureCollection. Control defaults come from ``ANNOTATOR_*``
environment variables (see ``AnnotatorConfig.from_env``).
"""

from __future__ import annotations

import argparse
import logging
import sys

from raster_annotator.core.config import AnnotatorConfig
from raster_annotator.core.exceptions import AnnotatorError

logger = logging.getLogger("raster_annotator.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raster_annotator",
        description="Draw labelled polygons on a raster and export them as GeoJSON.",
    )
    parser.add_argument("raster", help="Path to a raster file readable by rasterio")
    parser.add_argument("--band", type=int, default=1, help="One-based band index (default: 1)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = AnnotatorConfig.from_env()
    except (AnnotatorError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from raster_annotator.providers.factory import open_raster
    from raster_annotator.viewer.figure import draw_features

    try:
        raster = open_raster(args.raster, band=args.band)
        annotator = draw_features(raster, config)
        sys.stdout.write(annotator.session.serialize_all() + "\n")
    except AnnotatorError as exc:
        logger.error("Annotation failed | code=%s | %s", exc.code, exc.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
