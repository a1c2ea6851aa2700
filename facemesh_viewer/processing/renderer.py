"""Face Mesh 오버레이 렌더링"""

from typing import Dict, Optional

import cv2
import numpy as np

from ..config.constants import OVERLAY_PARTS, Connections, facemesh_connections
from ..config.settings import RenderStyle
from ..models import FaceLandmarks, FaceMeshResult


class FaceMeshRenderer:
    """입력 이미지 위에 랜드마크 연결선을 그린다"""

    def __init__(
        self,
        style: Optional[RenderStyle] = None,
        connections: Optional[Dict[str, Connections]] = None
    ):
        """
        초기화

        Args:
            style: 부위별 색상/두께 (None이면 config.yaml의 rendering 섹션)
            connections: 부위별 연결선 (None이면 MediaPipe 기본값)
        """
        self.style = style or RenderStyle.from_config()
        self.connections = connections if connections is not None else facemesh_connections()

    def render(self, result: FaceMeshResult) -> np.ndarray:
        """
        오버레이가 그려진 이미지 반환 (원본은 변경하지 않음)

        Args:
            result: Face Mesh 처리 결과

        Returns:
            BGR 이미지
        """
        canvas = self._to_bgr(result.input_image)
        for face in result.multi_face_landmarks:
            self.draw_face(canvas, face)
        return canvas

    def draw_face(self, canvas: np.ndarray, face: FaceLandmarks):
        """얼굴 하나의 연결선을 canvas에 직접 그림"""
        height, width = canvas.shape[:2]
        points = [
            (int(round(lm.x * width)), int(round(lm.y * height)))
            for lm in face
        ]

        for part in OVERLAY_PARTS:
            edges = self.connections.get(part)
            if not edges:
                continue
            style = self.style.style_for(part)
            for start, end in edges:
                # 468점 결과에는 홍채 인덱스가 없음
                if start >= len(points) or end >= len(points):
                    continue
                cv2.line(
                    canvas, points[start], points[end],
                    style.color, style.thickness, cv2.LINE_AA
                )

    @staticmethod
    def _to_bgr(image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
        return image.copy()
