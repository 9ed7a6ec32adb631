"""
Custom exceptions for the scene importer module.
"""


class ImporterError(Exception):
    """Base exception for importer errors."""
    pass


class GLBParseError(ImporterError):
    """Raised when GLB file cannot be parsed."""
    pass


class SkeletonError(ImporterError):
    """Raised when skeleton extraction fails."""
    pass


class NoSkeletonFoundError(SkeletonError):
    """Raised when a scene walk completes without accepting any joint."""
    pass


class TransformConversionError(SkeletonError):
    """Raised when a joint transform cannot be decomposed."""

    def __init__(self, joint_name: str, message: str = None):
        self.joint_name = joint_name
        super().__init__(
            message or f'Failed to extract skeleton transform for joint "{joint_name}".'
        )


class TrackError(ImporterError):
    """Raised when a float track or its sampling job is invalid."""
    pass
