from pathlib import Path
from tkinter import filedialog, ttk
from typing import Optional

import cv2
from PIL import Image, ImageTk
from tkinterdnd2 import DND_FILES, TkinterDnD

from ..core import FaceMeshEngine
from ..models import FaceMeshResult
from ..processing import FaceMeshRenderer, ImagePipeline, log_nose_landmark
from ..utils import get_config, get_logger
from .layout import PREVIEW_BORDER, preview_viewport

logger = get_logger(__name__)


class FaceMeshApp(TkinterDnD.Tk):
    """정지 이미지 Face Mesh 데모 윈도우"""

    def __init__(
        self,
        engine: Optional[FaceMeshEngine] = None,
        pipeline: Optional[ImagePipeline] = None,
        renderer: Optional[FaceMeshRenderer] = None
    ):
        super().__init__()
        config = get_config()
        self.title(config.get('ui.title', "MediaPipe Face Mesh"))
        self.geometry(config.get('ui.window_size', "1024x820"))
        self.file_types = config.get('ui.file_types', ["*.jpg", "*.jpeg", "*.png"])

        self.pipeline = pipeline or ImagePipeline()
        self.renderer = renderer or FaceMeshRenderer()
        self.engine = engine or FaceMeshEngine()

        self._photo = None  # PhotoImage 참조 유지 (GC 방지)

        self.create_widgets()
        self.setup_static_image_pipeline()
        self.protocol("WM_DELETE_WINDOW", self.on_close)

    def create_widgets(self):
        main_frame = ttk.Frame(self)
        main_frame.pack(fill="both", expand=True, padx=10, pady=10)

        self.load_button = ttk.Button(main_frame, text="Load Picture", command=self.load_picture)
        self.load_button.pack(fill="x")

        # 미리보기 영역 (크기가 다운스케일 기준 뷰포트)
        self.preview_frame = ttk.Frame(main_frame, relief="sunken", borderwidth=PREVIEW_BORDER)
        self.preview_frame.pack(fill="both", expand=True, pady=(10, 0))
        # 표시 중인 이미지 크기가 프레임 크기에 영향을 주지 않도록 고정
        self.preview_frame.grid_propagate(False)
        self.preview_frame.grid_rowconfigure(0, weight=1)
        self.preview_frame.grid_columnconfigure(0, weight=1)

        self.image_label = ttk.Label(
            self.preview_frame,
            text="Load a picture or drop an image file here",
            anchor="center"
        )
        self.image_label.grid(row=0, column=0, sticky="nsew")

        self.status_label = ttk.Label(self, text="Ready", anchor="w")
        self.status_label.pack(fill="x", padx=10, pady=(0, 5))

        self.preview_frame.drop_target_register(DND_FILES)
        self.preview_frame.dnd_bind('<<Drop>>', self.handle_drop)

    def setup_static_image_pipeline(self):
        """엔진 콜백 연결"""
        self.engine.set_result_listener(self.on_result)
        self.engine.set_error_listener(self.on_error)

    def load_picture(self):
        """파일 선택 대화상자에서 이미지 선택"""
        file_path = filedialog.askopenfilename(
            title="Select a picture",
            filetypes=[("Images", " ".join(self.file_types)), ("All files", "*.*")]
        )
        if file_path:
            self.load_image(file_path)

    def handle_drop(self, event):
        paths = self.tk.splitlist(event.data)
        if paths:
            self.load_image(paths[0])

    def load_image(self, file_path: str):
        """전처리 후 엔진에 전달 (결과는 on_result로 도착)"""
        self.update_idletasks()
        viewport = preview_viewport(
            self.preview_frame.winfo_width(), self.preview_frame.winfo_height()
        )
        if viewport is not None:
            self.pipeline.set_viewport(*viewport)

        image = self.pipeline.prepare(file_path)
        if image is None:
            self.set_status(f"Could not read {Path(file_path).name}")
            return

        self.set_status(f"Processing {Path(file_path).name}...")
        self.engine.send(image)

    def on_result(self, result: FaceMeshResult):
        # 엔진 워커 스레드에서 호출됨
        log_nose_landmark(result, show_pixel_values=True)
        self.after(0, self.update_view, result)

    def on_error(self, message: str, error: Exception):
        # 엔진 워커 스레드에서 호출됨
        logger.error(f"MediaPipe Face Mesh error: {message}")
        self.after(0, self.set_status, f"Face Mesh error: {message}")

    def update_view(self, result: FaceMeshResult):
        """오버레이 렌더링 후 미리보기 갱신 (메인 스레드)"""
        annotated = self.renderer.render(result)
        rgb = cv2.cvtColor(annotated, cv2.COLOR_BGR2RGB)
        self._photo = ImageTk.PhotoImage(Image.fromarray(rgb))
        self.image_label.config(image=self._photo, text="")

        faces = len(result.multi_face_landmarks)
        self.set_status(
            f"{faces} face(s), {result.image_width}x{result.image_height}, "
            f"{result.processing_time:.0f}ms"
        )

    def set_status(self, text: str):
        self.status_label.config(text=text)

    def on_close(self):
        self.engine.close()
        self.destroy()
