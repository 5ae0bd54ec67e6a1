import unittest

from samevents.events import CompactEvent, Event
from samevents.paging import iter_compact, page_compact, page_raw, take


def _edits():
    return [
        Event("mismatch", 1, 0, 0),
        Event("match", 1, 1, 1),
        Event("mismatch", 1, 2, 2),
        Event("insertion", 1, 3, 3),
        Event("match", 2, 3, 4),
        Event("deletion", 2, 5, 6),
    ]


SLOTS = [CompactEvent(0, 0, 1, 1), CompactEvent(2, 2, 1, 2), CompactEvent(5, 6, 2, 0)]


class TestTake(unittest.TestCase):
    def test_take(self):
        self.assertEqual(list(take(range(10), 3, 4)), [3, 4, 5, 6])
        self.assertEqual(list(take(range(10), 8, 4)), [8, 9])
        self.assertEqual(list(take(range(5), -1, 2)), [0, 1])
        self.assertEqual(list(take(range(5), 0, -3)), [])


class TestPageRaw(unittest.TestCase):
    def test_remaining(self):
        items = list(range(10))
        page = page_raw(items, 4)
        self.assertEqual(page.events, [0, 1, 2, 3])
        self.assertEqual((page.written, page.remaining), (4, 6))
        page = page_raw(items, 4, 8)
        self.assertEqual((page.events, page.remaining), ([8, 9], 0))
        page = page_raw(items, 4, 12)
        self.assertEqual((page.written, page.remaining), (0, 0))

    def test_zero_capacity(self):
        page = page_raw(range(7), 0)
        self.assertEqual((page.written, page.remaining), (0, 7))

    def test_negative_arguments(self):
        page = page_raw(range(7), -2, -5)
        self.assertEqual((page.written, page.remaining), (0, 7))


class TestCompact(unittest.TestCase):
    def test_merge_insertion_then_deletion(self):
        evs = [Event("insertion", 1, 2, 2), Event("deletion", 1, 2, 3)]
        self.assertEqual(list(iter_compact(evs, 0)), [CompactEvent(2, 2, 1, 1)])

    def test_no_merge_when_apart(self):
        evs = [Event("insertion", 1, 3, 3), Event("deletion", 1, 5, 6)]
        self.assertEqual(list(iter_compact(evs, 100)), [CompactEvent(103, 3, 0, 1), CompactEvent(105, 6, 1, 0)])

    def test_adjacent_mismatches_merge(self):
        evs = [Event("mismatch", 1, 0, 0), Event("mismatch", 1, 1, 1)]
        self.assertEqual(list(iter_compact(evs, 10)), [CompactEvent(10, 0, 2, 2)])

    def test_matches_dropped(self):
        evs = [Event("match", 5, 0, 0)]
        self.assertEqual(list(iter_compact(evs, 0)), [])

    def test_slots(self):
        self.assertEqual(list(iter_compact(_edits(), 0)), SLOTS)

    def test_page_compact(self):
        page = page_compact(_edits(), 0, 10)
        self.assertEqual((page.events, page.remaining), (SLOTS, 0))
        page = page_compact(_edits(), 0, 0)
        self.assertEqual((page.written, page.remaining), (0, 4))
        page = page_compact(_edits(), 0, 1)
        self.assertEqual((page.events, page.remaining), (SLOTS[:1], 3))
        page = page_compact(_edits(), 0, 1, 1)
        self.assertEqual((page.events, page.remaining), (SLOTS[1:2], 1))
        page = page_compact(_edits(), 0, 2, 1)
        self.assertEqual((page.events, page.remaining), (SLOTS[1:], 0))
        page = page_compact(_edits(), 0, 2, 5)
        self.assertEqual((page.written, page.remaining), (0, 0))

    def test_page_compact_continuation(self):
        collected = []
        offset = 0
        while True:
            page = page_compact(_edits(), 0, 1, offset)
            collected.extend(page.events)
            offset += page.written
            if not page.remaining:
                break
        self.assertEqual(collected, SLOTS)


if __name__ == "__main__":
    unittest.main()
