"""추론 전 이미지 전처리 파이프라인"""

from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..models import ExifOrientation
from ..utils import get_config, get_logger
from ..utils.exceptions import ImageDecodeError, OrientationError
from ..utils.validators import validate_viewport
from .image_ops import (
    correct_orientation,
    decode_image,
    downscale_to_viewport,
    read_exif_orientation,
)

logger = get_logger(__name__)


class ImagePipeline:
    """디코딩 → 방향 보정 → 뷰포트 다운스케일"""

    def __init__(self, viewport_width: int = None, viewport_height: int = None):
        """
        초기화

        Args:
            viewport_width: 미리보기 너비 (None이면 config의 viewport.width)
            viewport_height: 미리보기 높이 (None이면 config의 viewport.height)
        """
        config = get_config()
        self.viewport_width = viewport_width or config.get('viewport.width', 960)
        self.viewport_height = viewport_height or config.get('viewport.height', 720)
        validate_viewport(self.viewport_width, self.viewport_height)

    def set_viewport(self, width: int, height: int):
        """미리보기 영역 크기 변경"""
        validate_viewport(width, height)
        self.viewport_width = width
        self.viewport_height = height

    def prepare(self, image_path: Union[str, Path]) -> Optional[np.ndarray]:
        """
        이미지 파일을 추론 입력으로 변환

        디코딩 실패 시 로그만 남기고 None 반환.
        EXIF 읽기 실패 시 로그를 남기고 회전 없이 진행.

        Args:
            image_path: 이미지 파일 경로

        Returns:
            BGR 이미지 또는 None
        """
        try:
            image = decode_image(image_path)
        except ImageDecodeError as e:
            logger.error(f"Bitmap reading error: {e}")
            return None

        try:
            orientation = read_exif_orientation(image_path)
        except OrientationError as e:
            logger.error(f"Bitmap rotation error: {e}")
            orientation = ExifOrientation.NORMAL

        image = correct_orientation(image, orientation)
        prepared = downscale_to_viewport(image, self.viewport_width, self.viewport_height)

        logger.info(
            f"Prepared {Path(image_path).name}: orientation={orientation.name}, "
            f"size={prepared.shape[1]}x{prepared.shape[0]} "
            f"(viewport {self.viewport_width}x{self.viewport_height})"
        )
        return prepared
