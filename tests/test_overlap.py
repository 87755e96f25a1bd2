from __future__ import annotations

import random

import pytest

from practice_calendar.models import CalendarEntry, EntryKind
from practice_calendar.overlap import assign_lanes, find_clusters
from practice_calendar.positioning import PositionedEntry


def _slot(entry_id: str, start: int, end: int) -> PositionedEntry:
    entry = CalendarEntry(id=entry_id, kind=EntryKind.EVENT, title=entry_id)
    return PositionedEntry(entry=entry, start_slot=start, end_slot=end)


def _lanes(assigned) -> dict[str, tuple[int, int]]:
    return {item.entry.id: (item.lane, item.lane_count) for item in assigned}


def test_empty_input() -> None:
    assert assign_lanes([]) == ()
    assert find_clusters([]) == ()


def test_two_overlapping_entries_share_width() -> None:
    # 09:00-10:00 and 09:30-10:30 on the default grid.
    assigned = assign_lanes([_slot("a", 4, 6), _slot("b", 5, 7)])

    assert _lanes(assigned) == {"a": (0, 2), "b": (1, 2)}


def test_back_to_back_entries_do_not_overlap() -> None:
    assigned = assign_lanes([_slot("a", 4, 6), _slot("b", 6, 8), _slot("c", 10, 11)])

    assert _lanes(assigned) == {"a": (0, 1), "b": (0, 1), "c": (0, 1)}
    assert len(find_clusters(assigned)) == 3


def test_freed_lane_is_reused() -> None:
    assigned = assign_lanes([_slot("long", 4, 8), _slot("short", 5, 6), _slot("later", 6, 7)])

    assert _lanes(assigned) == {"long": (0, 2), "short": (1, 2), "later": (1, 2)}


def test_transitive_cluster_shares_lane_count() -> None:
    assigned = assign_lanes([_slot("a", 4, 6), _slot("b", 5, 8), _slot("c", 7, 9)])

    assert _lanes(assigned) == {"a": (0, 2), "b": (1, 2), "c": (0, 2)}
    assert len(find_clusters(assigned)) == 1


def test_ties_place_longer_entry_first() -> None:
    assigned = assign_lanes([_slot("short", 4, 5), _slot("long", 4, 8)])

    assert [item.entry.id for item in assigned] == ["long", "short"]
    assert _lanes(assigned) == {"long": (0, 2), "short": (1, 2)}


def test_clusters_count_lanes_independently() -> None:
    assigned = assign_lanes(
        [
            _slot("a", 0, 4),
            _slot("b", 1, 3),
            _slot("c", 2, 4),
            _slot("d", 10, 12),
        ]
    )

    assert _lanes(assigned) == {"a": (0, 3), "b": (1, 3), "c": (2, 3), "d": (0, 1)}


def test_input_is_not_mutated() -> None:
    original = [_slot("a", 4, 6), _slot("b", 5, 7)]

    assign_lanes(original)

    assert [(item.lane, item.lane_count) for item in original] == [(0, 1), (0, 1)]


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_random_layouts_never_share_lanes_when_overlapping(seed: int) -> None:
    rng = random.Random(seed)
    entries = []
    for index in range(40):
        start = rng.randrange(0, 27)
        entries.append(_slot(f"e{index}", start, start + rng.randrange(1, 6)))

    assigned = assign_lanes(entries)

    assert sorted(item.entry.id for item in assigned) == sorted(item.entry.id for item in entries)
    for first in assigned:
        assert 0 <= first.lane < first.lane_count
        for second in assigned:
            if first is not second and first.overlaps(second):
                assert first.lane != second.lane
    for cluster in find_clusters(assigned):
        lanes = {item.lane for item in cluster}
        assert lanes == set(range(cluster[0].lane_count))
        assert {item.lane_count for item in cluster} == {cluster[0].lane_count}
