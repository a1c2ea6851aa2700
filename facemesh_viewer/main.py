"""
facemesh-viewer 실행 진입점

사용법:
    facemesh-viewer                                  # GUI 실행
    facemesh-viewer --image photo.jpg --output out.png --json out.json
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

import cv2

from .utils.config_loader import set_config_path
from .utils.exceptions import ConfigurationError, FaceMeshViewerException

EXIT_OK = 0
EXIT_IMAGE_ERROR = 1
EXIT_NO_FACE = 2
EXIT_INFERENCE_ERROR = 3
EXIT_CONFIG_ERROR = 4


def parse_viewport(value: str) -> Tuple[int, int]:
    """'960x720' → (960, 720)"""
    try:
        width, height = (int(v) for v in value.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"viewport must look like WIDTHxHEIGHT, got '{value}'")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"viewport must be positive, got '{value}'")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='MediaPipe Face Mesh 정지 이미지 뷰어')
    parser.add_argument('--image', help='분석할 이미지 (지정하지 않으면 GUI 실행)')
    parser.add_argument('--output', help='오버레이 이미지 저장 경로')
    parser.add_argument('--json', help='랜드마크 JSON 저장 경로')
    parser.add_argument('--viewport', type=parse_viewport, help='다운스케일 기준 크기 (예: 960x720)')
    parser.add_argument(
        '--normalized',
        action='store_true',
        help='코끝 좌표를 정규화 값으로 출력'
    )
    parser.add_argument('--config', help='config.yaml 경로')
    return parser


def run_headless(args: argparse.Namespace) -> int:
    """GUI 없이 이미지 한 장 처리"""
    from .core import FaceMeshEngine
    from .processing import (
        FaceMeshRenderer,
        ImagePipeline,
        export_result_json,
        log_nose_landmark,
    )
    from .utils import get_logger

    logger = get_logger(__name__)

    pipeline = ImagePipeline(*args.viewport) if args.viewport else ImagePipeline()
    image = pipeline.prepare(args.image)
    if image is None:
        return EXIT_IMAGE_ERROR

    try:
        with FaceMeshEngine() as engine:
            result = engine.process(image)
    except FaceMeshViewerException as e:
        logger.error(f"MediaPipe Face Mesh error: {e}")
        return EXIT_INFERENCE_ERROR

    log_nose_landmark(result, show_pixel_values=not args.normalized)

    if args.output:
        annotated = FaceMeshRenderer().render(result)
        if not cv2.imwrite(args.output, annotated):
            logger.error(f"Failed to write overlay image: {args.output}")
        else:
            logger.info(f"Overlay saved: {args.output}")

    if args.json:
        export_result_json(result, args.json)

    if not result.has_faces:
        logger.warning("No face detected")
        return EXIT_NO_FACE
    return EXIT_OK


def run_gui() -> int:
    from .ui.app import FaceMeshApp

    app = FaceMeshApp()
    app.mainloop()
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.config:
        try:
            set_config_path(args.config)
        except ConfigurationError as e:
            # 설정 로드 전이므로 기본 logging 사용
            logging.getLogger(__name__).error(f"Config error: {e}")
            return EXIT_CONFIG_ERROR

    if args.image:
        return run_headless(args)
    return run_gui()


if __name__ == "__main__":
    sys.exit(main())
