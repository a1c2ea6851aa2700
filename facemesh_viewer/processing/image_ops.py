# -*- coding: utf-8 -*-
"""
Image utility functions
디코딩, EXIF 방향 보정, 뷰포트 기준 다운스케일
"""

import io
from pathlib import Path
from typing import BinaryIO, Tuple, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..config.constants import EXIF_ORIENTATION_TAG
from ..models import ExifOrientation
from ..utils import get_logger
from ..utils.exceptions import ImageDecodeError, OrientationError
from ..utils.validators import validate_image, validate_viewport

logger = get_logger(__name__)

ImageSource = Union[str, Path, bytes]

_ROTATION_DEGREES = {
    ExifOrientation.ROTATE_90: 90,
    ExifOrientation.ROTATE_180: 180,
    ExifOrientation.ROTATE_270: 270,
}

# 시계 방향 회전
_CV2_ROTATE_CODES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def decode_image(source: ImageSource) -> np.ndarray:
    """
    이미지 파일(또는 bytes)을 BGR 배열로 디코딩

    OpenCV가 EXIF 방향을 자동 적용하지 않도록 IMREAD_IGNORE_ORIENTATION 사용.
    방향 보정은 correct_orientation()에서 명시적으로 수행한다.

    Args:
        source: 파일 경로 또는 인코딩된 이미지 bytes

    Returns:
        BGR 이미지 (H, W, 3)

    Raises:
        ImageDecodeError: 파일을 읽을 수 없거나 디코딩 실패
    """
    if isinstance(source, (bytes, bytearray)):
        buffer = np.frombuffer(source, dtype=np.uint8)
    else:
        try:
            # 한글 경로 대응: cv2.imread 대신 np.fromfile + imdecode
            buffer = np.fromfile(str(source), dtype=np.uint8)
        except OSError as e:
            raise ImageDecodeError(f"Failed to read image file {source}: {e}")

    if buffer.size == 0:
        raise ImageDecodeError(f"Empty image data: {_describe(source)}")

    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR | cv2.IMREAD_IGNORE_ORIENTATION)
    if image is None:
        raise ImageDecodeError(f"Failed to decode image: {_describe(source)}")

    logger.debug(f"Decoded image: {image.shape[1]}x{image.shape[0]}")
    return image


def read_exif_orientation(source: Union[ImageSource, BinaryIO]) -> ExifOrientation:
    """
    EXIF Orientation 태그 읽기

    Args:
        source: 파일 경로, bytes 또는 바이너리 스트림

    Returns:
        ExifOrientation (태그 없음 → NORMAL, 알 수 없는 값 → UNDEFINED)

    Raises:
        OrientationError: 메타데이터를 읽을 수 없는 경우
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    try:
        with Image.open(source) as img:
            value = img.getexif().get(EXIF_ORIENTATION_TAG)
    except (OSError, UnidentifiedImageError, SyntaxError) as e:
        raise OrientationError(f"Failed to read EXIF metadata: {e}")

    if value is None:
        return ExifOrientation.NORMAL

    try:
        return ExifOrientation(int(value))
    except (TypeError, ValueError):
        logger.warning(f"Unknown EXIF orientation value: {value!r}")
        return ExifOrientation.UNDEFINED


def rotation_degrees(orientation: ExifOrientation) -> int:
    """EXIF 방향 → 시계 방향 회전 각도 (회전 태그 외에는 0)"""
    return _ROTATION_DEGREES.get(orientation, 0)


def rotate_image(image: np.ndarray, degrees: int) -> np.ndarray:
    """
    시계 방향으로 90도 단위 회전

    Args:
        image: 입력 이미지
        degrees: 회전 각도 (90의 배수, 음수는 반시계 방향)

    Returns:
        회전된 이미지 (0도면 입력 그대로)
    """
    if degrees % 90 != 0:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")

    degrees %= 360
    if degrees == 0:
        return image
    return cv2.rotate(image, _CV2_ROTATE_CODES[degrees])


def correct_orientation(image: np.ndarray, orientation: ExifOrientation) -> np.ndarray:
    """
    EXIF 방향에 맞춰 이미지를 똑바로 세움

    NORMAL이면 입력 버퍼를 그대로 반환한다.
    반전 계열 태그(2, 4, 5, 7)는 회전 0으로 처리한다.
    """
    if orientation == ExifOrientation.NORMAL:
        return image

    degrees = rotation_degrees(orientation)
    if degrees == 0:
        logger.debug(f"Orientation {orientation.name} is not a rotation, left as is")
    return rotate_image(image, degrees)


def fit_to_viewport(
    image_width: int,
    image_height: int,
    viewport_width: int,
    viewport_height: int
) -> Tuple[int, int]:
    """
    종횡비를 유지하면서 뷰포트에 들어가는 크기 계산

    Returns:
        (width, height)
    """
    validate_viewport(viewport_width, viewport_height)

    aspect_ratio = image_width / image_height
    width, height = viewport_width, viewport_height
    if viewport_width / viewport_height > aspect_ratio:
        width = int(height * aspect_ratio)
    else:
        height = int(width / aspect_ratio)

    return max(width, 1), max(height, 1)


def downscale_to_viewport(
    image: np.ndarray,
    viewport_width: int,
    viewport_height: int
) -> np.ndarray:
    """
    뷰포트 크기에 맞춰 리사이즈 (종횡비 유지, 보간 없음)

    Args:
        image: 입력 이미지
        viewport_width: 뷰포트 너비
        viewport_height: 뷰포트 높이

    Returns:
        리사이즈된 이미지
    """
    validate_image(image)
    height, width = image.shape[:2]
    new_width, new_height = fit_to_viewport(width, height, viewport_width, viewport_height)

    if (new_width, new_height) == (width, height):
        return image
    return cv2.resize(image, (new_width, new_height), interpolation=cv2.INTER_NEAREST)


def _describe(source) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)
