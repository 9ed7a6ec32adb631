"""
Scalar keyframe track and its sampling job.

Track times are normalized: keys lie in [0, 1], sorted ascending.
"""

import logging
from bisect import bisect_right
from typing import Optional, Sequence

import numpy as np

from ..importer.exceptions import TrackError

logger = logging.getLogger(__name__)


class FloatTrack:
    """
    Keyframed scalar curve with linear interpolation between keys.
    """

    def __init__(self, times: Sequence[float], values: Sequence[float]):
        """
        Initialize float track.

        Args:
            times: Key times in [0, 1], strictly increasing
            values: Key values, one per time

        Raises:
            TrackError: If keys are invalid
        """
        self.times = [float(t) for t in times]
        self.values = [float(v) for v in values]

        if len(self.times) != len(self.values):
            raise TrackError(f"Track has {len(self.times)} times but {len(self.values)} values")
        if len(self.times) < 2:
            raise TrackError("Track needs at least two keys")
        if self.times[0] < 0.0 or self.times[-1] > 1.0:
            raise TrackError("Track key times must lie in [0, 1]")
        if np.any(np.diff(self.times) <= 0.0):
            raise TrackError("Track key times must be strictly increasing")

    def __len__(self) -> int:
        return len(self.times)


class FloatTrackSamplingJob:
    """Samples a FloatTrack at a given normalized time."""

    def __init__(self, track: Optional[FloatTrack] = None, time: float = 0.0):
        self.track = track
        self.time = time

    def validate(self) -> bool:
        return self.track is not None

    def run(self) -> float:
        """
        Sample the track.

        Returns:
            Interpolated value at the time clamped to [0, 1]

        Raises:
            TrackError: If the job has no track
        """
        if not self.validate():
            raise TrackError("Sampling job has no track")

        clamped_time = min(max(self.time, 0.0), 1.0)
        times = self.track.times
        values = self.track.values

        # First key strictly after the sampled time
        k1 = bisect_right(times, clamped_time)
        # Time past the last key samples the last segment
        k1 = min(max(k1, 1), len(times) - 1)

        tk0, tk1 = times[k1 - 1], times[k1]
        vk0, vk1 = values[k1 - 1], values[k1]
        # Clamp so times before the first key hold its value
        alpha = min(max((clamped_time - tk0) / (tk1 - tk0), 0.0), 1.0)
        return vk0 + (vk1 - vk0) * alpha


def sample_track(track: FloatTrack, time: float) -> float:
    """Sample ``track`` at ``time``."""
    return FloatTrackSamplingJob(track, time).run()
