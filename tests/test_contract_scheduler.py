import copy
import math
import random
import unittest
from decimal import Decimal
from fractions import Fraction

from ytplan.errors import InvalidInputError
from ytplan.models import Video
from ytplan.scheduler import EPSILON, schedule


def videos_of(*durations):
    return [Video(id=f"v{i + 1}", title=f"Video {i + 1}", duration_minutes=d) for i, d in enumerate(durations)]


def spans(day):
    return [(s.video_id, s.start_offset, s.end_offset, s.is_partial) for s in day.segments]


class TestSchedulerScenariosContract(unittest.TestCase):
    def test_item_split_across_three_days(self) -> None:
        days = schedule(videos_of(25, 40, 15), 30)

        self.assertEqual([d.index for d in days], [1, 2, 3])
        self.assertEqual(spans(days[0]), [("v1", 0, 25, False), ("v2", 0, 5, True)])
        self.assertEqual(spans(days[1]), [("v2", 5, 35, True)])
        self.assertEqual(spans(days[2]), [("v2", 35, 40, True), ("v3", 0, 15, False)])
        self.assertEqual([d.total_minutes for d in days], [30, 30, 20])
        self.assertEqual(sum(d.total_minutes for d in days), 80)

    def test_remainder_fills_day_exactly(self) -> None:
        days = schedule(videos_of(20, 40, 15), 30)

        self.assertEqual(len(days), 3)
        self.assertEqual(spans(days[0]), [("v1", 0, 20, False), ("v2", 0, 10, True)])
        self.assertEqual(spans(days[1]), [("v2", 10, 40, True)])
        self.assertEqual(spans(days[2]), [("v3", 0, 15, False)])
        self.assertEqual(days[2].total_minutes, 15)

    def test_empty_playlist_yields_no_days(self) -> None:
        self.assertEqual(schedule([], 30), [])

    def test_zero_capacity_yields_no_days(self) -> None:
        self.assertEqual(schedule(videos_of(10), 0), [])

    def test_negative_capacity_yields_no_days(self) -> None:
        self.assertEqual(schedule(videos_of(15), -5), [])

    def test_infinite_capacity_yields_no_days(self) -> None:
        self.assertEqual(schedule(videos_of(15), math.inf), [])

    def test_zero_length_video_shares_the_open_day(self) -> None:
        days = schedule(videos_of(0, 10), 10)

        self.assertEqual(len(days), 1)
        self.assertEqual(spans(days[0]), [("v1", 0, 0, False), ("v2", 0, 10, False)])
        self.assertEqual(days[0].segments[0].duration, 0)

    def test_negative_duration_raises(self) -> None:
        with self.assertRaises(InvalidInputError) as ctx:
            schedule(videos_of(15, -5), 30)
        self.assertIn("v2", str(ctx.exception))


class TestSchedulerEdgeCasesContract(unittest.TestCase):
    def test_video_equal_to_capacity_is_one_full_day(self) -> None:
        days = schedule(videos_of(30), 30)

        self.assertEqual(len(days), 1)
        self.assertEqual(spans(days[0]), [("v1", 0, 30, False)])
        self.assertFalse(days[0].segments[0].is_partial)

    def test_exact_fill_does_not_leave_an_empty_day(self) -> None:
        days = schedule(videos_of(30, 10), 30)

        self.assertEqual(len(days), 2)
        self.assertEqual(spans(days[1]), [("v2", 0, 10, False)])
        for day in days:
            self.assertTrue(day.segments)

    def test_long_video_spans_whole_days(self) -> None:
        days = schedule(videos_of(70), 30)

        self.assertEqual(len(days), 3)
        self.assertEqual([d.total_minutes for d in days], [30, 30, 10])
        self.assertEqual(
            [spans(d) for d in days],
            [[("v1", 0, 30, True)], [("v1", 30, 60, True)], [("v1", 60, 70, True)]],
        )

    def test_long_video_multiple_of_capacity(self) -> None:
        days = schedule(videos_of(90), 30)
        self.assertEqual([d.total_minutes for d in days], [30, 30, 30])

    def test_trailing_zero_length_video_does_not_add_a_day(self) -> None:
        days = schedule(videos_of(10, 0), 10)

        self.assertEqual(len(days), 1)
        self.assertEqual([s.video_id for s in days[0].segments], ["v1", "v2"])

    def test_zero_length_video_between_days_joins_the_next_day(self) -> None:
        days = schedule(videos_of(10, 0, 5), 10)

        self.assertEqual(len(days), 2)
        self.assertEqual([s.video_id for s in days[0].segments], ["v1"])
        self.assertEqual([s.video_id for s in days[1].segments], ["v2", "v3"])

    def test_trailing_run_of_zero_length_videos_does_not_add_a_day(self) -> None:
        days = schedule(videos_of(10, 0, 0), 10)

        self.assertEqual(len(days), 1)
        self.assertEqual([s.video_id for s in days[0].segments], ["v1", "v2", "v3"])

    def test_last_segment_ends_exactly_at_video_duration(self) -> None:
        videos = videos_of(1427 / 60, 613 / 60)
        days = schedule(videos, 17.3)

        for video in videos:
            own = [s for d in days for s in d.segments if s.video_id == video.id]
            self.assertEqual(own[-1].end_offset, own[-1].video_duration)
            self.assertTrue(own[-1].ends_at_end)

    def test_only_zero_length_videos(self) -> None:
        days = schedule(videos_of(0, 0), 10)

        self.assertEqual(len(days), 1)
        self.assertEqual(len(days[0].segments), 2)
        self.assertEqual(days[0].total_minutes, 0)

    def test_fractional_durations_close_days_within_tolerance(self) -> None:
        days = schedule(videos_of(*([0.1] * 30)), 1.0)

        self.assertEqual(len(days), 3)
        for day in days:
            self.assertAlmostEqual(day.total_minutes, 1.0, places=9)

    def test_days_are_never_marked_completed(self) -> None:
        days = schedule(videos_of(25, 40, 15), 30)
        self.assertTrue(all(not d.completed for d in days))

    def test_segment_back_references_video(self) -> None:
        videos = videos_of(45)
        days = schedule(videos, 30)
        for day in days:
            for segment in day.segments:
                self.assertEqual(segment.title, "Video 1")
                self.assertEqual(segment.video_duration, 45)


class TestSchedulerInputValidationContract(unittest.TestCase):
    def test_nan_duration_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            schedule(videos_of(10, float("nan")), 30)

    def test_infinite_duration_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            schedule(videos_of(math.inf), 30)

    def test_non_numeric_duration_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            schedule([Video(id="x", title="X", duration_minutes="10")], 30)

    def test_nan_capacity_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            schedule(videos_of(10), float("nan"))

    def test_invalid_duration_raises_even_with_non_positive_capacity(self) -> None:
        with self.assertRaises(InvalidInputError):
            schedule(videos_of(-5), 0)

    def test_decimal_duration_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            schedule(videos_of(Decimal("10")), 30)

    def test_fraction_durations_are_accepted(self) -> None:
        videos = videos_of(Fraction(1, 3), Fraction(5))
        days = schedule(videos, 30)

        self.assertEqual(len(days), 1)
        self.assertEqual([s.video_id for s in days[0].segments], ["v1", "v2"])
        self.assertAlmostEqual(days[0].total_minutes, 16 / 3, places=9)
        self.assertFalse(any(s.is_partial for s in days[0].segments))

    def test_fraction_capacity_is_accepted(self) -> None:
        days = schedule(videos_of(10), Fraction(5, 1))

        self.assertEqual([d.total_minutes for d in days], [5, 5])

    def test_invalid_input_error_is_a_value_error(self) -> None:
        self.assertTrue(issubclass(InvalidInputError, ValueError))


class TestSchedulerPropertiesContract(unittest.TestCase):
    def _random_cases(self, seed: int, count: int):
        rng = random.Random(seed)
        for _ in range(count):
            n = rng.randint(1, 25)
            durations = []
            for _ in range(n):
                roll = rng.random()
                if roll < 0.1:
                    durations.append(0)
                elif roll < 0.5:
                    durations.append(round(rng.uniform(0.1, 90), 2))
                else:
                    durations.append(rng.uniform(0.01, 20) / 3)
            capacity = rng.choice([5, 15, 30, 45.5, 60, rng.uniform(1, 120)])
            yield videos_of(*durations), capacity

    def test_invariants_hold_for_random_playlists(self) -> None:
        for videos, capacity in self._random_cases(seed=1234, count=300):
            days = schedule(videos, capacity)
            with self.subTest(durations=[v.duration_minutes for v in videos], capacity=capacity):
                self.assertTrue(days)

                # Sequential 1-based indices.
                self.assertEqual([d.index for d in days], list(range(1, len(days) + 1)))

                # Capacity bound.
                for day in days:
                    self.assertLessEqual(day.total_minutes, capacity + EPSILON)
                    self.assertTrue(day.segments)

                # Order preservation and contiguous coverage.
                segments = [s for d in days for s in d.segments]
                order = []
                for s in segments:
                    if not order or order[-1] != s.video_id:
                        order.append(s.video_id)
                self.assertEqual(order, [v.id for v in videos])

                for video in videos:
                    own = [s for s in segments if s.video_id == video.id]
                    self.assertEqual(own[0].start_offset, 0)
                    for prev, nxt in zip(own, own[1:]):
                        self.assertEqual(nxt.start_offset, prev.end_offset)
                        self.assertGreater(nxt.end_offset, nxt.start_offset)
                    self.assertLessEqual(abs(own[-1].end_offset - video.duration_minutes), EPSILON)

                    # Conservation per video.
                    covered = sum(s.duration for s in own)
                    self.assertLessEqual(abs(covered - video.duration_minutes), EPSILON)

                for s in segments:
                    self.assertTrue(s.duration > 0 or s.video_duration == 0)

    def test_deterministic_and_does_not_mutate_input(self) -> None:
        for videos, capacity in self._random_cases(seed=99, count=50):
            snapshot = copy.deepcopy(videos)
            first = schedule(videos, capacity)
            second = schedule(videos, capacity)
            self.assertEqual(first, second)
            self.assertEqual(videos, snapshot)

    def test_non_final_days_are_full(self) -> None:
        for videos, capacity in self._random_cases(seed=7, count=100):
            days = schedule(videos, capacity)
            for day in days[:-1]:
                self.assertGreaterEqual(day.total_minutes, capacity - EPSILON)


if __name__ == "__main__":
    unittest.main(verbosity=2)
