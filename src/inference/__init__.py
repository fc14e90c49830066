"""
Vision backends used by the frame classifier.
"""

from .backend import BackendUnavailableError, VisionBackend
from .opencv_backend import OpenCVVisionBackend, create_vision_backend

__all__ = [
    "BackendUnavailableError",
    "VisionBackend",
    "OpenCVVisionBackend",
    "create_vision_backend",
]
