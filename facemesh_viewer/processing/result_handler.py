"""검출 결과 로그 출력 및 JSON 저장"""

import json
from pathlib import Path
from typing import Optional, Union

from ..config.constants import NOSE_LANDMARK_INDEX
from ..models import FaceMeshResult
from ..utils import get_logger

logger = get_logger(__name__)


def log_nose_landmark(result: Optional[FaceMeshResult], show_pixel_values: bool = True):
    """
    첫 번째 얼굴의 코끝 좌표 로그 출력

    Args:
        result: Face Mesh 처리 결과
        show_pixel_values: True면 입력 이미지 기준 픽셀 좌표, False면 정규화 좌표
    """
    if result is None or not result.has_faces:
        return

    face = result.multi_face_landmarks[0]
    if len(face) <= NOSE_LANDMARK_INDEX:
        logger.warning(f"Face has only {len(face)} landmarks, nose landmark unavailable")
        return

    nose = face[NOSE_LANDMARK_INDEX]
    if show_pixel_values:
        x, y = nose.to_pixel(result.image_width, result.image_height)
        logger.info(
            f"MediaPipe Face Mesh nose coordinates (pixel values): x={x:f}, y={y:f}"
        )
    else:
        logger.info(
            "MediaPipe Face Mesh nose normalized coordinates (value range: [0, 1]): "
            f"x={nose.x:f}, y={nose.y:f}"
        )


def export_result_json(result: FaceMeshResult, output_path: Union[str, Path]) -> Path:
    """
    결과를 JSON 파일로 저장

    Args:
        result: Face Mesh 처리 결과
        output_path: 저장 경로

    Returns:
        저장된 파일 경로
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info(f"Result saved: {output_path}")
    return output_path
