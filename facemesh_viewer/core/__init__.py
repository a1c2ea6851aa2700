"""MediaPipe Face Mesh engine"""

from .face_mesh import FaceMeshEngine

__all__ = ['FaceMeshEngine']
