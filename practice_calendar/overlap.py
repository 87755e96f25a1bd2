"""Side-by-side lane assignment for concurrent timed entries."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from .positioning import PositionedEntry


def _layout_order(positioned: Sequence[PositionedEntry]) -> List[PositionedEntry]:
    # Earlier start first, longer entries first on ties, then input order.
    indexed = sorted(
        enumerate(positioned),
        key=lambda item: (item[1].start_slot, -item[1].span, item[0]),
    )
    return [item for _, item in indexed]


def find_clusters(positioned: Sequence[PositionedEntry]) -> tuple[tuple[PositionedEntry, ...], ...]:
    """Split entries into maximal runs of transitively overlapping entries."""

    clusters: List[List[PositionedEntry]] = []
    current: List[PositionedEntry] = []
    cluster_end = -1

    for item in _layout_order(positioned):
        if current and item.start_slot >= cluster_end:
            clusters.append(current)
            current = []
        if not current:
            cluster_end = item.end_slot
        current.append(item)
        cluster_end = max(cluster_end, item.end_slot)

    if current:
        clusters.append(current)
    return tuple(tuple(cluster) for cluster in clusters)


def _assign_cluster(cluster: Sequence[PositionedEntry]) -> List[PositionedEntry]:
    lane_ends: List[int] = []
    lanes: List[int] = []

    for item in cluster:
        for lane, lane_end in enumerate(lane_ends):
            if lane_end <= item.start_slot:
                lane_ends[lane] = item.end_slot
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(item.end_slot)
        lanes.append(lane)

    lane_count = len(lane_ends)
    return [
        replace(item, lane=lane, lane_count=lane_count)
        for item, lane in zip(cluster, lanes)
    ]


def assign_lanes(positioned: Sequence[PositionedEntry]) -> tuple[PositionedEntry, ...]:
    """Give each entry the lowest free lane within its overlap cluster.

    Every member of a cluster shares the cluster's ``lane_count``, which is the
    number of lanes the cluster opened. Lanes only divide the rendering width and
    are not stable across snapshots. The result is in layout order: start slot,
    then longest first.
    """

    assigned: List[PositionedEntry] = []
    for cluster in find_clusters(positioned):
        assigned.extend(_assign_cluster(cluster))
    return tuple(assigned)


__all__ = ["assign_lanes", "find_clusters"]
