"""공용 테스트 fixture"""

from types import SimpleNamespace

import numpy as np
import pytest
from PIL import Image

from facemesh_viewer.config.constants import EXIF_ORIENTATION_TAG


def two_tone_image(width: int, height: int) -> Image.Image:
    """왼쪽 절반 빨강, 오른쪽 절반 파랑 (RGB)"""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, : width // 2] = (255, 0, 0)
    pixels[:, width // 2:] = (0, 0, 255)
    return Image.fromarray(pixels)


@pytest.fixture
def make_photo(tmp_path):
    """EXIF Orientation 태그가 들어간 JPEG 생성"""

    def _make(width=64, height=48, orientation=None, name="photo.jpg"):
        path = tmp_path / name
        img = two_tone_image(width, height)
        if orientation is None:
            img.save(path, format="JPEG", quality=95)
        else:
            exif = Image.Exif()
            exif[EXIF_ORIENTATION_TAG] = orientation
            img.save(path, format="JPEG", quality=95, exif=exif.tobytes())
        return path

    return _make


def fake_mediapipe_face(points):
    """MediaPipe NormalizedLandmarkList 흉내"""
    return SimpleNamespace(
        landmark=[SimpleNamespace(x=x, y=y, z=z) for x, y, z in points]
    )


class FakeFaceMeshSolution:
    """mp.solutions.face_mesh.FaceMesh 대체 (process/close만 제공)"""

    def __init__(self, faces=None, error=None):
        self.faces = faces or []
        self.error = error
        self.received = []
        self.closed = False

    def process(self, image_rgb):
        self.received.append(image_rgb)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            multi_face_landmarks=[fake_mediapipe_face(f) for f in self.faces] or None
        )

    def close(self):
        self.closed = True


@pytest.fixture
def face_points():
    # 0: 이마, 1: 코끝, 2: 턱
    return [(0.5, 0.2, 0.0), (0.5, 0.5, -0.05), (0.5, 0.9, 0.01)]


@pytest.fixture
def fake_solution(face_points):
    return FakeFaceMeshSolution(faces=[face_points])
