"""
facemesh_viewer
MediaPipe Face Mesh 정지 이미지 뷰어
"""

__version__ = "0.1.0"
