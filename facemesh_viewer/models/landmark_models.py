"""데이터 모델 정의"""

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np


class ExifOrientation(IntEnum):
    """EXIF Orientation 태그 값 (0x0112)"""
    UNDEFINED = 0
    NORMAL = 1
    FLIP_HORIZONTAL = 2
    ROTATE_180 = 3
    FLIP_VERTICAL = 4
    TRANSPOSE = 5
    ROTATE_90 = 6
    TRANSVERSE = 7
    ROTATE_270 = 8


@dataclass
class Landmark:
    """단일 랜드마크 포인트"""

    x: float  # 정규화 x 좌표 (0-1)
    y: float  # 정규화 y 좌표 (0-1)
    z: float = 0.0  # 깊이 정보 (상대적)

    def to_pixel(self, width: int, height: int) -> Tuple[float, float]:
        """이미지 크기 기준 픽셀 좌표"""
        return self.x * width, self.y * height

    def to_dict(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'z': self.z}


@dataclass
class FaceLandmarks:
    """얼굴 한 개의 랜드마크 (순서 보존)"""

    landmarks: List[Landmark] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.landmarks)

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __iter__(self) -> Iterator[Landmark]:
        return iter(self.landmarks)

    @classmethod
    def from_mediapipe(cls, face_landmarks) -> 'FaceLandmarks':
        """MediaPipe NormalizedLandmarkList → FaceLandmarks"""
        return cls([Landmark(x=lm.x, y=lm.y, z=lm.z) for lm in face_landmarks.landmark])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'num_landmarks': len(self.landmarks),
            'landmarks': [lm.to_dict() for lm in self.landmarks],
        }


@dataclass
class FaceMeshResult:
    """Face Mesh 처리 결과 (입력 이미지 포함)"""

    multi_face_landmarks: List[FaceLandmarks]
    input_image: np.ndarray
    processing_time: float = 0.0  # ms
    timestamp: float = field(default_factory=time.time)

    @property
    def has_faces(self) -> bool:
        return len(self.multi_face_landmarks) > 0

    @property
    def image_width(self) -> int:
        return int(self.input_image.shape[1])

    @property
    def image_height(self) -> int:
        return int(self.input_image.shape[0])

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환 (JSON export용, 이미지는 제외)"""
        return {
            'image_size': {
                'width': self.image_width,
                'height': self.image_height,
            },
            'num_faces': len(self.multi_face_landmarks),
            'processing_time_ms': round(self.processing_time, 2),
            'timestamp': self.timestamp,
            'faces': [face.to_dict() for face in self.multi_face_landmarks],
        }
