"""
Animation runtime utilities.
"""

from .float_track import FloatTrack, FloatTrackSamplingJob, sample_track

__all__ = ['FloatTrack', 'FloatTrackSamplingJob', 'sample_track']
