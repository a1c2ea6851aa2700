"""Configuration constants and settings"""

from .settings import FaceMeshOptions, ConnectionStyle, RenderStyle

__all__ = ['FaceMeshOptions', 'ConnectionStyle', 'RenderStyle']
