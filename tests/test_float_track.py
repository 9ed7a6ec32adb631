"""
Unit tests for float track sampling.
"""

import unittest

from scene2skel.animation import FloatTrack, FloatTrackSamplingJob, sample_track
from scene2skel.importer.exceptions import TrackError


class TestFloatTrackSampling(unittest.TestCase):
    """Test sampling a float track."""

    def setUp(self):
        self.track = FloatTrack([0.0, 0.5, 1.0], [0.0, 10.0, 20.0])

    def test_interpolates_between_keys(self):
        self.assertAlmostEqual(sample_track(self.track, 0.25), 5.0)
        self.assertAlmostEqual(sample_track(self.track, 0.75), 15.0)

    def test_samples_on_keys(self):
        self.assertAlmostEqual(sample_track(self.track, 0.0), 0.0)
        self.assertAlmostEqual(sample_track(self.track, 0.5), 10.0)
        self.assertAlmostEqual(sample_track(self.track, 1.0), 20.0)

    def test_clamps_time(self):
        self.assertAlmostEqual(sample_track(self.track, -3.0), 0.0)
        self.assertAlmostEqual(sample_track(self.track, 7.0), 20.0)

    def test_keys_inside_range(self):
        track = FloatTrack([0.2, 0.8], [1.0, 3.0])
        self.assertAlmostEqual(sample_track(track, 0.0), 1.0)
        self.assertAlmostEqual(sample_track(track, 0.5), 2.0)
        self.assertAlmostEqual(sample_track(track, 1.0), 3.0)

    def test_job(self):
        job = FloatTrackSamplingJob(self.track, 0.5)
        self.assertTrue(job.validate())
        self.assertAlmostEqual(job.run(), 10.0)
        with self.assertRaises(TrackError):
            FloatTrackSamplingJob(time=0.5).run()


class TestFloatTrackValidation(unittest.TestCase):
    """Test rejecting invalid tracks."""

    def test_invalid_tracks(self):
        cases = {
            'length mismatch': ([0.0, 1.0], [1.0]),
            'single key': ([0.5], [1.0]),
            'unsorted': ([0.0, 0.6, 0.4], [1.0, 2.0, 3.0]),
            'duplicate time': ([0.0, 0.5, 0.5], [1.0, 2.0, 3.0]),
            'out of range': ([0.0, 1.5], [1.0, 2.0]),
        }
        for name, (times, values) in cases.items():
            with self.subTest(name):
                with self.assertRaises(TrackError):
                    FloatTrack(times, values)


if __name__ == '__main__':
    unittest.main()
