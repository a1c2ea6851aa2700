"""결과 로그/JSON 저장 및 렌더러 테스트"""

import json
import logging

import numpy as np

from facemesh_viewer.config.settings import ConnectionStyle, RenderStyle
from facemesh_viewer.models import FaceLandmarks, FaceMeshResult, Landmark
from facemesh_viewer.processing import (
    FaceMeshRenderer,
    export_result_json,
    log_nose_landmark,
)


def _result(points, width=200, height=100):
    face = FaceLandmarks([Landmark(x, y, z) for x, y, z in points])
    return FaceMeshResult(
        multi_face_landmarks=[face] if points else [],
        input_image=np.zeros((height, width, 3), dtype=np.uint8),
        processing_time=12.5
    )


def test_nose_landmark_logged_in_pixels(face_points, caplog):
    with caplog.at_level(logging.INFO):
        log_nose_landmark(_result(face_points), show_pixel_values=True)
    assert "nose coordinates (pixel values): x=100.000000, y=50.000000" in caplog.text


def test_nose_landmark_logged_normalized(face_points, caplog):
    with caplog.at_level(logging.INFO):
        log_nose_landmark(_result(face_points), show_pixel_values=False)
    assert "value range: [0, 1]): x=0.500000, y=0.500000" in caplog.text


def test_nose_landmark_skipped_without_face(caplog):
    with caplog.at_level(logging.INFO):
        log_nose_landmark(None)
        log_nose_landmark(_result([]))
    assert "nose" not in caplog.text


def test_export_result_json(tmp_path, face_points):
    path = export_result_json(_result(face_points), tmp_path / "out" / "result.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["image_size"] == {"width": 200, "height": 100}
    assert data["num_faces"] == 1
    assert data["processing_time_ms"] == 12.5
    assert data["faces"][0]["num_landmarks"] == 3
    assert data["faces"][0]["landmarks"][1] == {"x": 0.5, "y": 0.5, "z": -0.05}


def _renderer(connections):
    style = RenderStyle(parts={
        'face_oval': ConnectionStyle(color=(0, 0, 255), thickness=1),
        'left_iris': ConnectionStyle(color=(0, 255, 0), thickness=1),
    })
    return FaceMeshRenderer(style=style, connections=connections)


def test_render_draws_connections_on_copy(face_points):
    result = _result(face_points)
    annotated = _renderer({'face_oval': frozenset({(0, 2)})}).render(result)

    # 원본은 그대로
    assert not result.input_image.any()
    # (0.5, 0.2) → (0.5, 0.9) 세로선
    assert annotated[50, 100, 2] > 0
    assert not annotated[:, :90].any()


def test_render_skips_connections_beyond_landmarks(face_points):
    # 홍채 인덱스(468+)는 468점 결과에 없음
    annotated = _renderer({'left_iris': frozenset({(1, 470)})}).render(_result(face_points))
    assert not annotated.any()


def test_render_without_face_returns_plain_copy():
    result = _result([])
    annotated = _renderer({'face_oval': frozenset({(0, 1)})}).render(result)
    assert annotated is not result.input_image
    np.testing.assert_array_equal(annotated, result.input_image)


def test_render_style_from_config():
    style = RenderStyle.from_config()
    assert style.style_for('left_eye').color == (48, 255, 48)
    assert style.style_for('tesselation').thickness == 1
