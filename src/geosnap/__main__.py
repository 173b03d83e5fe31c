"""
GeoSnap CLI entry point.

Usage:
    python -m geosnap                       # Run the Kivy app
    python -m geosnap --headless            # One capture from the webcam, print JSON
    python -m geosnap --headless --image P  # Enrich an existing photo
    python -m geosnap --help                # Show help
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from .core.camera import get_camera_provider
from .core.config import Config
from .core.errors import ConfigurationError
from .core.location import ConfiguredLocationProvider
from .core.metadata import CaptureResult
from .core.permissions import PermissionGate
from .core.pipeline import CaptureEnrichmentPipeline
from .core.providers import CaptureOptions


def setup_logging(config: Config) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file = log_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=handlers,
    )


def _report(title: str, message: str) -> None:
    print(f"{title}: {message}", file=sys.stderr)


async def capture_once(config: Config, image_path: str | None = None) -> CaptureResult | None:
    """
    Run the permission gate and one capture without a UI.

    Args:
        config: Configuration.
        image_path: Enrich this photo instead of grabbing a webcam frame.

    Returns:
        CaptureResult, or None if the capture failed or was cancelled.
    """
    camera = get_camera_provider(config["camera"], image_path=image_path)
    location = ConfiguredLocationProvider(config["location"])

    gate = PermissionGate(camera, location, on_notice=_report)
    grant = await gate.request()

    pipeline = CaptureEnrichmentPipeline(
        camera,
        location,
        options=CaptureOptions(
            quality=config.get("capture.quality", 0.8),
            wants_embedded_metadata=config.get("capture.exif", True),
        ),
        timezone=config.get("capture.timezone", "UTC"),
        on_alert=_report,
    )
    return await pipeline.run(grant)


def run_headless(config: Config, image_path: str | None = None) -> int:
    """Capture once and print the result as JSON. Returns the exit code."""
    result = asyncio.run(capture_once(config, image_path))
    if result is None:
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="GeoSnap - Geotagged Photo Capture",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m geosnap                              Run the app
    python -m geosnap --camera 1                   Use camera index 1
    python -m geosnap --headless                   Capture once, print JSON
    python -m geosnap --headless --image a.jpg     Enrich an existing photo
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Capture once without the UI and print the result"
    )
    parser.add_argument(
        "--image", type=str, help="Use this photo instead of the camera"
    )
    parser.add_argument(
        "--camera", type=int, help="Camera index to use (overrides config)"
    )
    parser.add_argument(
        "--config", type=str, help="Path to configuration directory"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode"
    )

    args = parser.parse_args()

    config_dir = Path(args.config) if args.config else None
    try:
        config = Config(config_dir)

        if args.camera is not None:
            os.environ["GEOSNAP_CAMERA_SOURCE"] = str(args.camera)
            config.reload()

        if args.debug:
            os.environ["GEOSNAP_ENV"] = "development"
            config.reload()
    except ConfigurationError as e:
        parser.error(str(e))

    setup_logging(config)

    logger = logging.getLogger(__name__)
    logger.info("GeoSnap starting...")
    logger.info(f"Environment: {config.env}")

    if args.headless:
        sys.exit(run_headless(config, args.image))

    from .mobile.app import run_mobile_app

    run_mobile_app(config, image_path=args.image)


if __name__ == "__main__":
    main()
