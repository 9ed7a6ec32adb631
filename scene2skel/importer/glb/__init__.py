"""
GLB/GLTF scene loading module.
"""

from .parser import GLBParser, load_scene
from .accessor import AccessorReader

__all__ = ['GLBParser', 'AccessorReader', 'load_scene']
