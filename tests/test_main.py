"""CLI(headless) 테스트"""

import argparse
import json
import logging

import pytest

import facemesh_viewer.core
from conftest import FakeFaceMeshSolution
from facemesh_viewer.config.settings import FaceMeshOptions
from facemesh_viewer.core import FaceMeshEngine
from facemesh_viewer.utils.exceptions import ConfigurationError
from facemesh_viewer.main import (
    EXIT_CONFIG_ERROR,
    EXIT_IMAGE_ERROR,
    EXIT_INFERENCE_ERROR,
    EXIT_NO_FACE,
    EXIT_OK,
    main,
    parse_viewport,
)


@pytest.fixture
def fake_engine(monkeypatch):
    """run_headless가 가짜 solution을 쓰는 엔진을 생성하도록 교체"""

    def install(solution):
        def factory():
            return FaceMeshEngine(FaceMeshOptions(), solution=solution)
        monkeypatch.setattr(facemesh_viewer.core, 'FaceMeshEngine', factory)
        return solution

    return install


def test_parse_viewport():
    assert parse_viewport("640x480") == (640, 480)
    assert parse_viewport("640X480") == (640, 480)
    for bad in ("640", "ax480", "0x10"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_viewport(bad)


def test_headless_writes_json(make_photo, tmp_path, fake_engine, face_points):
    solution = fake_engine(FakeFaceMeshSolution(faces=[face_points]))
    json_path = tmp_path / "landmarks.json"

    code = main([
        '--image', str(make_photo(width=400, height=200)),
        '--viewport', '200x200',
        '--json', str(json_path),
    ])

    assert code == EXIT_OK
    assert solution.closed
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["image_size"] == {"width": 200, "height": 100}
    assert data["num_faces"] == 1


def test_headless_no_face(make_photo, fake_engine):
    fake_engine(FakeFaceMeshSolution())
    assert main(['--image', str(make_photo())]) == EXIT_NO_FACE


def test_headless_unreadable_image(tmp_path, fake_engine):
    fake_engine(FakeFaceMeshSolution())
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"garbage")
    assert main(['--image', str(path)]) == EXIT_IMAGE_ERROR


def test_headless_engine_failure_is_logged(make_photo, fake_engine, caplog):
    fake_engine(FakeFaceMeshSolution(error=RuntimeError("graph failed")))

    with caplog.at_level(logging.ERROR):
        code = main(['--image', str(make_photo())])

    assert code == EXIT_INFERENCE_ERROR
    assert "MediaPipe Face Mesh error" in caplog.text
    assert "graph failed" in caplog.text


def test_engine_setup_failure_is_logged(make_photo, monkeypatch, caplog):
    def broken_factory():
        raise ConfigurationError("Failed to initialize MediaPipe FaceMesh: no model")

    monkeypatch.setattr(facemesh_viewer.core, 'FaceMeshEngine', broken_factory)

    with caplog.at_level(logging.ERROR):
        code = main(['--image', str(make_photo())])

    assert code == EXIT_INFERENCE_ERROR
    assert "no model" in caplog.text


def test_missing_config_file(tmp_path, make_photo, caplog):
    with caplog.at_level(logging.ERROR):
        code = main(['--config', str(tmp_path / "nope.yaml"), '--image', str(make_photo())])

    assert code == EXIT_CONFIG_ERROR
    assert "Config file not found" in caplog.text
