"""
Data models.
"""
from .landmark_models import ExifOrientation, Landmark, FaceLandmarks, FaceMeshResult

__all__ = ['ExifOrientation', 'Landmark', 'FaceLandmarks', 'FaceMeshResult']
