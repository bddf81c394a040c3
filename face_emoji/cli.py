"""
Face Emoji Tracker - command line entry point

Usage:
    face-emoji
    face-emoji --camera 1 --threshold 0.1
    face-emoji --config my_config.yaml --max-frames 300 --no-display
"""

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from .app import ApplicationController
from .config.settings import load_app_config
from .core.camera import CameraManager
from .processing.face_tracker import FaceTracker
from .rendering.renderer import RenderingEngine
from .utils import Config, set_config, setup_logging
from .utils.exceptions import FaceEmojiError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='face-emoji',
        description='Track head direction and facial expression from a webcam',
    )
    parser.add_argument('--config', help='config.yaml path (default: packaged config)')
    parser.add_argument('--camera', type=int, help='capture device id')
    parser.add_argument('--threshold', type=float, help='head direction threshold')
    parser.add_argument('--max-frames', type=int, help='stop after N processed frames')
    parser.add_argument('--no-display', action='store_true', help='run without a window')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='override logging.level')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config_file = Config(args.config)
    except (FileNotFoundError, ValueError) as e:
        # logging itself is configured from this file
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    set_config(config_file)
    # module loggers were set up from the packaged config at import
    logger = setup_logging('face_emoji', level=args.log_level, reset=True)

    try:
        config = load_app_config(config=config_file)
        if args.camera is not None:
            config.camera = replace(config.camera, device_id=args.camera)
        if args.threshold is not None:
            config.tracking = replace(config.tracking, direction_threshold=args.threshold)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    controller = ApplicationController(
        camera=CameraManager(config.camera),
        tracker=FaceTracker(config=config.tracking),
        renderer=RenderingEngine(config.rendering),
        config=config,
    )

    try:
        controller.start()
    except FaceEmojiError as e:
        logger.error(f"Failed to start: {e}")
        controller.stop()
        return 1

    try:
        controller.run(max_frames=args.max_frames, display=not args.no_display)
    except KeyboardInterrupt:
        logger.info("Interrupted")

    return 0


if __name__ == '__main__':
    sys.exit(main())
