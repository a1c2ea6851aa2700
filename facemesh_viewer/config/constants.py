"""얼굴 랜드마크 인덱스 및 시스템 상수 정의"""

from typing import Dict, FrozenSet, List, Tuple

# MediaPipe Face Mesh landmark 개수
NUM_FACE_LANDMARKS = 468
NUM_REFINED_LANDMARKS = 478  # refine_landmarks=True 시 홍채 10개 추가

# 코끝 (로그 출력용)
NOSE_LANDMARK_INDEX = 1

# EXIF Orientation 태그 ID
EXIF_ORIENTATION_TAG = 0x0112

# 오버레이 그리기 순서 (뒤에 그린 것이 위에 보임)
OVERLAY_PARTS: List[str] = [
    'tesselation',
    'right_eye',
    'right_eyebrow',
    'left_eye',
    'left_eyebrow',
    'face_oval',
    'lips',
    'right_iris',
    'left_iris',
]

# mediapipe.solutions.face_mesh 상수 이름
_MEDIAPIPE_CONNECTION_NAMES: Dict[str, str] = {
    'tesselation': 'FACEMESH_TESSELATION',
    'right_eye': 'FACEMESH_RIGHT_EYE',
    'right_eyebrow': 'FACEMESH_RIGHT_EYEBROW',
    'left_eye': 'FACEMESH_LEFT_EYE',
    'left_eyebrow': 'FACEMESH_LEFT_EYEBROW',
    'face_oval': 'FACEMESH_FACE_OVAL',
    'lips': 'FACEMESH_LIPS',
    'right_iris': 'FACEMESH_RIGHT_IRIS',
    'left_iris': 'FACEMESH_LEFT_IRIS',
}

Connections = FrozenSet[Tuple[int, int]]


def facemesh_connections() -> Dict[str, Connections]:
    """
    MediaPipe가 제공하는 부위별 연결선 반환

    Returns:
        {'tesselation': frozenset({(start, end), ...}), ...}
    """
    import mediapipe as mp

    face_mesh = mp.solutions.face_mesh
    return {
        part: frozenset(getattr(face_mesh, attr))
        for part, attr in _MEDIAPIPE_CONNECTION_NAMES.items()
    }
