"""
Scene importing and skeleton extraction.
"""

from .exceptions import (
    ImporterError,
    GLBParseError,
    SkeletonError,
    NoSkeletonFoundError,
    TransformConversionError,
    TrackError,
)
from .transform import Transform, TransformConverter

__all__ = ['ImporterError', 'GLBParseError', 'SkeletonError', 'NoSkeletonFoundError',
           'TransformConversionError', 'TrackError', 'Transform', 'TransformConverter']
