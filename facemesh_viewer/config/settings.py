"""시스템 설정 클래스 정의"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..utils.config_loader import Config, get_config
from ..utils.exceptions import ConfigurationError
from ..utils.validators import validate_confidence
from .constants import OVERLAY_PARTS


@dataclass
class FaceMeshOptions:
    """MediaPipe Face Mesh 설정 (setup 시 한 번 전달)"""

    static_image_mode: bool = True   # True: 정지 이미지, False: 비디오
    refine_landmarks: bool = True    # 눈/입술 정밀 검출 + 홍채
    run_on_gpu: bool = True
    max_num_faces: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    def __post_init__(self):
        """설정 값 검증"""
        try:
            validate_confidence(self.min_detection_confidence, "min_detection_confidence")
            validate_confidence(self.min_tracking_confidence, "min_tracking_confidence")
        except ValueError as e:
            raise ConfigurationError(str(e))
        if self.max_num_faces < 1:
            raise ConfigurationError("max_num_faces must be >= 1")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'FaceMeshOptions':
        """config.yaml의 facemesh 섹션으로부터 생성"""
        section = (config or get_config()).get('facemesh', {}) or {}
        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class ConnectionStyle:
    """연결선 스타일 (BGR)"""

    color: Tuple[int, int, int] = (224, 224, 224)
    thickness: int = 2


@dataclass
class RenderStyle:
    """부위별 오버레이 스타일"""

    parts: Dict[str, ConnectionStyle] = field(
        default_factory=lambda: {part: ConnectionStyle() for part in OVERLAY_PARTS}
    )

    def style_for(self, part: str) -> ConnectionStyle:
        return self.parts.get(part, ConnectionStyle())

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'RenderStyle':
        """config.yaml의 rendering 섹션으로부터 생성"""
        section = (config or get_config()).get('rendering', {}) or {}
        parts = {}
        for part in OVERLAY_PARTS:
            spec = section.get(part)
            if spec is None:
                parts[part] = ConnectionStyle()
                continue
            color = spec.get('color', ConnectionStyle.color)
            if len(color) != 3:
                raise ConfigurationError(f"rendering.{part}.color must have 3 components, got {color}")
            thickness = int(spec.get('thickness', ConnectionStyle.thickness))
            if thickness < 1:
                raise ConfigurationError(f"rendering.{part}.thickness must be >= 1")
            parts[part] = ConnectionStyle(
                color=tuple(int(c) for c in color),
                thickness=thickness
            )
        return cls(parts=parts)
