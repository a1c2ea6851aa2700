"""Processing layer components"""

from .image_ops import (
    correct_orientation,
    decode_image,
    downscale_to_viewport,
    fit_to_viewport,
    read_exif_orientation,
    rotate_image,
    rotation_degrees,
)
from .pipeline import ImagePipeline
from .renderer import FaceMeshRenderer
from .result_handler import export_result_json, log_nose_landmark

__all__ = [
    'correct_orientation',
    'decode_image',
    'downscale_to_viewport',
    'fit_to_viewport',
    'read_exif_orientation',
    'rotate_image',
    'rotation_degrees',
    'ImagePipeline',
    'FaceMeshRenderer',
    'export_result_json',
    'log_nose_landmark',
]
