"""MediaPipe Face Mesh 기반 랜드마크 검출 엔진 (콜백 API)"""

import queue
import threading
import time
from typing import Callable, Optional

import cv2
import mediapipe as mp
import numpy as np

from ..config.settings import FaceMeshOptions
from ..models import FaceLandmarks, FaceMeshResult
from ..utils import get_logger
from ..utils.exceptions import (
    ConfigurationError,
    FaceMeshViewerException,
    InferenceError,
)
from ..utils.validators import validate_image

logger = get_logger(__name__)

ResultListener = Callable[[FaceMeshResult], None]
ErrorListener = Callable[[str, Exception], None]

_STOP = object()


class FaceMeshEngine:
    """
    MediaPipe Face Mesh 래퍼

    send()로 전달된 이미지는 엔진 전용 워커 스레드에서 처리되며,
    결과/에러 리스너도 해당 워커 스레드에서 호출된다.
    UI 갱신은 호출 측에서 메인 스레드로 넘겨야 한다.
    """

    def __init__(self, options: Optional[FaceMeshOptions] = None, solution=None):
        """
        초기화

        Args:
            options: Face Mesh 설정 (None이면 config.yaml의 facemesh 섹션)
            solution: process(rgb_image)를 제공하는 객체 (테스트용 주입)

        Raises:
            ConfigurationError: MediaPipe 초기화 실패
        """
        self.options = options or FaceMeshOptions.from_config()
        self.face_mesh = solution if solution is not None else self._create_solution(self.options)

        self._result_listener: Optional[ResultListener] = None
        self._error_listener: Optional[ErrorListener] = None

        self._queue: "queue.Queue" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._process_lock = threading.Lock()
        self._closed = False

    @staticmethod
    def _create_solution(options: FaceMeshOptions):
        if options.run_on_gpu:
            # Python solution API에는 GPU 스위치가 없음
            logger.info("run_on_gpu is set; MediaPipe selects the delegate for this platform")

        try:
            face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=options.static_image_mode,
                max_num_faces=options.max_num_faces,
                refine_landmarks=options.refine_landmarks,
                min_detection_confidence=options.min_detection_confidence,
                min_tracking_confidence=options.min_tracking_confidence
            )
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize MediaPipe FaceMesh: {e}")

        logger.info(
            f"MediaPipe FaceMesh initialized (static_image_mode={options.static_image_mode}, "
            f"refine_landmarks={options.refine_landmarks})"
        )
        return face_mesh

    def set_result_listener(self, listener: ResultListener):
        """검출 결과 콜백 등록"""
        self._result_listener = listener

    def set_error_listener(self, listener: ErrorListener):
        """에러 콜백 등록 (message, exception)"""
        self._error_listener = listener

    @property
    def closed(self) -> bool:
        return self._closed

    def process(self, image: np.ndarray) -> FaceMeshResult:
        """
        동기 방식 랜드마크 검출

        Args:
            image: BGR 형식 이미지 (H, W, 3)

        Returns:
            FaceMeshResult (얼굴이 없으면 multi_face_landmarks가 빈 리스트)

        Raises:
            InvalidImageError: 이미지가 유효하지 않은 경우
            InferenceError: MediaPipe 처리 실패
        """
        if self._closed:
            raise InferenceError("FaceMeshEngine is closed")

        validate_image(image)
        image_rgb = self._to_rgb(image)

        start_time = time.time()
        with self._process_lock:
            try:
                results = self.face_mesh.process(image_rgb)
            except Exception as e:
                raise InferenceError(f"MediaPipe FaceMesh processing failed: {e}")
        processing_time = (time.time() - start_time) * 1000  # ms

        multi_face = getattr(results, 'multi_face_landmarks', None) or []
        faces = [FaceLandmarks.from_mediapipe(face) for face in multi_face]

        logger.debug(f"Detected {len(faces)} face(s) in {processing_time:.1f}ms")

        return FaceMeshResult(
            multi_face_landmarks=faces,
            input_image=image,
            processing_time=processing_time
        )

    def send(self, image: np.ndarray):
        """
        비동기 처리 요청 (결과는 리스너로 전달)

        Raises:
            InferenceError: 엔진이 이미 닫힌 경우
        """
        if self._closed:
            raise InferenceError("FaceMeshEngine is closed")

        self._ensure_worker()
        self._queue.put(image)

    def join(self):
        """send()로 넣은 이미지가 모두 처리될 때까지 대기"""
        self._queue.join()

    def close(self, timeout: float = 5.0):
        """워커 스레드 종료 및 MediaPipe 리소스 해제"""
        if self._closed:
            return
        self._closed = True

        if self._worker is not None and self._worker.is_alive():
            self._queue.put(_STOP)
            if threading.current_thread() is not self._worker:
                self._worker.join(timeout)

        if hasattr(self.face_mesh, 'close'):
            with self._process_lock:
                self.face_mesh.close()
        logger.debug("MediaPipe FaceMesh closed")

    def __enter__(self) -> 'FaceMeshEngine':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _ensure_worker(self):
        if self._worker is None or not self._worker.is_alive():
            self._worker = threading.Thread(
                target=self._run, name="FaceMeshWorker", daemon=True
            )
            self._worker.start()

    def _run(self):
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._handle(item)
            finally:
                self._queue.task_done()

    def _handle(self, image: np.ndarray):
        try:
            result = self.process(image)
        except FaceMeshViewerException as e:
            self._dispatch_error(str(e), e)
            return

        if self._result_listener is None:
            logger.warning("No result listener registered, result dropped")
            return

        try:
            self._result_listener(result)
        except Exception:
            logger.exception("Result listener raised")

    def _dispatch_error(self, message: str, error: Exception):
        if self._error_listener is None:
            logger.error(f"MediaPipe Face Mesh error: {message}")
            return
        try:
            self._error_listener(message, error)
        except Exception:
            logger.exception("Error listener raised")

    @staticmethod
    def _to_rgb(image: np.ndarray) -> np.ndarray:
        # BGR → RGB (MediaPipe 요구사항)
        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
        if image.shape[2] == 1:
            return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGB)
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
