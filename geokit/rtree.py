"""An R-tree spatial index with bulk loading, search, deletion and k-nearest queries."""

from __future__ import annotations

import math
import time
from bisect import bisect_right
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Callable, Iterable, Iterator, Sequence

from geokit.box import Box, bounding_box, box_union
from geokit.geometry import Geometry, Point


@dataclass
class Spatial:
    """An object stored in the tree: an identifier, free properties and a geometry."""

    id: str
    properties: Any = None
    geometry: Geometry | None = None


class _Entry:
    """A record in a node: either a child node or a stored object, with its box."""

    __slots__ = ("bb", "child", "obj")

    def __init__(
        self, bb: Box, child: _Node | None = None, obj: Spatial | None = None
    ) -> None:
        self.bb = bb
        self.child = child
        self.obj = obj


class _Node:
    __slots__ = ("parent", "leaf", "entries", "level")

    def __init__(
        self,
        level: int,
        leaf: bool = False,
        entries: list[_Entry] | None = None,
        parent: _Node | None = None,
    ) -> None:
        self.level = level
        self.leaf = leaf
        self.entries = entries if entries is not None else []
        self.parent = parent

    def bounding_box(self) -> Box:
        return box_union(*(e.bb for e in self.entries))

    def entry_in_parent(self) -> _Entry:
        for entry in self.parent.entries:
            if entry.child is self:
                return entry
        raise RuntimeError("node is missing from its parent")

    def all_bounding_boxes(self) -> list[Box]:
        boxes: list[Box] = []
        if self.leaf:
            return boxes
        for entry in self.entries:
            if entry.child is None:
                return boxes
            boxes.extend(entry.child.all_bounding_boxes())
            boxes.append(entry.bb)
        return boxes

    def _pick_seeds(self) -> tuple[int, int]:
        left, right = 0, 1
        max_wasted = -1.0
        for (i, e1), (j, e2) in combinations(enumerate(self.entries), 2):
            wasted = e1.bb.union(e2.bb).size() - e1.bb.size() - e2.bb.size()
            if wasted > max_wasted:
                max_wasted = wasted
                left, right = i, j
        return left, right

    def split(self, min_group_size: int) -> tuple[_Node, _Node]:
        """Split into two nodes, reusing this one as the left half."""
        l, r = self._pick_seeds()
        left_seed, right_seed = self.entries[l], self.entries[r]
        remaining = [e for i, e in enumerate(self.entries) if i not in (l, r)]

        self.entries = [left_seed]
        right = _Node(self.level, leaf=self.leaf, entries=[right_seed], parent=self.parent)
        if right_seed.child is not None:
            right_seed.child.parent = right
        if left_seed.child is not None:
            left_seed.child.parent = self

        while remaining:
            count = len(remaining)
            entry = remaining.pop(_pick_next(self, right, remaining))
            if count + len(self.entries) <= min_group_size:
                _assign(entry, self)
            elif count + len(right.entries) <= min_group_size:
                _assign(entry, right)
            else:
                _assign_group(entry, self, right)
        return self, right


def _assign(entry: _Entry, group: _Node) -> None:
    if entry.child is not None:
        entry.child.parent = group
    group.entries.append(entry)


def _assign_group(entry: _Entry, left: _Node, right: _Node) -> None:
    left_bb = left.bounding_box()
    right_bb = right.bounding_box()
    left_diff = left_bb.union(entry.bb).size() - left_bb.size()
    right_diff = right_bb.union(entry.bb).size() - right_bb.size()
    if left_diff != right_diff:
        _assign(entry, left if left_diff < right_diff else right)
        return
    if left_bb.size() != right_bb.size():
        _assign(entry, left if left_bb.size() < right_bb.size() else right)
        return
    _assign(entry, left if len(left.entries) <= len(right.entries) else right)


def _pick_next(left: _Node, right: _Node, entries: Sequence[_Entry]) -> int:
    chosen = 0
    max_diff = -1.0
    left_bb = left.bounding_box()
    right_bb = right.bounding_box()
    for i, entry in enumerate(entries):
        d1 = left_bb.union(entry.bb).size() - left_bb.size()
        d2 = right_bb.union(entry.bb).size() - right_bb.size()
        diff = abs(d1 - d2)
        if diff > max_diff:
            max_diff = diff
            chosen = i
    return chosen


def _partitions(items: list[_Entry], size: int) -> Iterator[list[_Entry]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


def _min_dist(point: Point, box: Box) -> float:
    """Squared distance from ``point`` to the nearest point of ``box``."""
    total = 0.0
    if point.x < box.min_x:
        total += (point.x - box.min_x) ** 2
    elif point.x > box.max_x:
        total += (point.x - box.max_x) ** 2
    if point.y < box.min_y:
        total += (point.y - box.min_y) ** 2
    elif point.y > box.max_y:
        total += (point.y - box.max_y) ** 2
    return total


def _insert_nearest(
    k: int, dists: list[float], nearest: list[Spatial], dist: float, obj: Spatial
) -> None:
    index = bisect_right(dists, dist)
    if index >= k:
        return
    dists.insert(index, dist)
    nearest.insert(index, obj)
    del dists[k:]
    del nearest[k:]


def _default_children(count: int) -> tuple[int, int]:
    if count < 10:
        return 2, 10
    return count // 6, count // 2


class RTree:
    """An R-tree holding Spatial objects, indexed by their bounding boxes."""

    def __init__(
        self, min_children: int, max_children: int, spatials: Iterable[Spatial] = ()
    ) -> None:
        self.min_children = min_children
        self.max_children = max_children
        self._height = 1
        self._size = 0
        self._root = _Node(1, leaf=True)
        objects = list(spatials)
        if len(objects) <= max_children:
            for obj in objects:
                self.insert(obj)
        else:
            self._bulk_load(objects)

    @classmethod
    def from_spatials(cls, *spatials: Spatial) -> RTree:
        """Build a tree with node capacities chosen from the number of objects."""
        min_children, max_children = _default_children(len(spatials))
        return cls(min_children, max_children, spatials)

    @classmethod
    def from_geometries(cls, *geometries: Geometry) -> RTree:
        """Build a tree from bare geometries, giving each a generated identifier."""
        stamp = time.time_ns()
        spatials = [
            Spatial(f"{stamp}_0_{i}", None, geometry)
            for i, geometry in enumerate(geometries)
        ]
        return cls.from_spatials(*spatials)

    def __len__(self) -> int:
        return self._size

    @property
    def depth(self) -> int:
        """Height of the tree; 1 when the root is a leaf."""
        return self._height

    def _bulk_load(self, objects: list[Spatial]) -> None:
        """Load all objects at once using overlap-minimising top-down loading."""
        if self.max_children < 2:
            raise ValueError("bulk loading needs max_children of at least 2")
        entries = [_Entry(bounding_box(obj.geometry), obj=obj) for obj in objects]
        n = float(len(entries))
        m = float(self.max_children)
        height = math.ceil(math.log2(n) / math.log2(m))
        subtree_size = m ** (height - 1)
        subtrees = math.ceil(n / subtree_size)
        slices = math.floor(math.sqrt(subtrees))

        entries.sort(key=lambda e: e.bb.min_x)
        self._height = height
        self._size = len(entries)
        self._root = self._omt(height, slices, entries, subtrees)

    def _omt(self, level: int, slices: int, entries: list[_Entry], m: int) -> _Node:
        if len(entries) <= m:
            if level > 1:
                child = self._omt(level - 1, slices, entries, m)
                node = _Node(level, entries=[_Entry(child.bounding_box(), child=child)])
                child.parent = node
                return node
            return _Node(level, leaf=True, entries=list(entries))

        node = _Node(level)
        k = -(-len(entries) // m)
        vertical_size = slices * k if slices > 1 else len(entries)
        if (self._height - level + 1) % 2 == 0:
            key = lambda e: e.bb.min_x  # noqa: E731
        else:
            key = lambda e: e.bb.max_x  # noqa: E731
        for vertical in _partitions(entries, vertical_size):
            for part in _partitions(sorted(vertical, key=key), k):
                child = self._omt(level - 1, 1, part, self.max_children)
                child.parent = node
                node.entries.append(_Entry(child.bounding_box(), child=child))
        return node

    def insert(self, obj: Spatial) -> None:
        """Add an object to the tree."""
        self._insert(_Entry(bounding_box(obj.geometry), obj=obj), 1)
        self._size += 1

    def insert_geometry(self, geometry: Geometry) -> Spatial:
        """Add a bare geometry under a generated identifier and return its record."""
        obj = Spatial(f"{time.time_ns()}_1_{self._size}", None, geometry)
        self.insert(obj)
        return obj

    def _insert(self, entry: _Entry, level: int) -> None:
        node = self._choose_node(self._root, entry, level)
        node.entries.append(entry)
        if entry.child is not None:
            entry.child.parent = node

        split = None
        if len(node.entries) > self.max_children:
            node, split = node.split(self.min_children)
        root, split_root = self._adjust_tree(node, split)
        if split_root is not None:
            self._height += 1
            self._root = _Node(
                self._height,
                entries=[
                    _Entry(root.bounding_box(), child=root),
                    _Entry(split_root.bounding_box(), child=split_root),
                ],
            )
            root.parent = self._root
            split_root.parent = self._root

    def _choose_node(self, node: _Node, entry: _Entry, level: int) -> _Node:
        while not (node.leaf or node.level == level):
            best_diff = math.inf
            chosen: _Entry | None = None
            for candidate in node.entries:
                diff = candidate.bb.union(entry.bb).size() - candidate.bb.size()
                if diff < best_diff or (
                    diff == best_diff
                    and chosen is not None
                    and candidate.bb.size() < chosen.bb.size()
                ):
                    best_diff = diff
                    chosen = candidate
            if chosen is None:
                return node
            node = chosen.child
        return node

    def _adjust_tree(
        self, node: _Node, split: _Node | None
    ) -> tuple[_Node, _Node | None]:
        while node is not self._root:
            node.entry_in_parent().bb = node.bounding_box()
            parent = node.parent
            if split is None:
                node = parent
                continue
            parent.entries.append(_Entry(split.bounding_box(), child=split))
            if len(parent.entries) > self.max_children:
                node, split = parent.split(self.min_children)
            else:
                node, split = parent, None
        return node, split

    def delete(self, obj: Spatial) -> bool:
        """Remove an object equal to ``obj``; return whether one was found."""
        return self.delete_with_comparator(obj, lambda a, b: a == b)

    def delete_by_id(self, spatial_id: str) -> bool:
        """Remove every object with the given identifier."""
        found = self.search_by_id(spatial_id)
        if not found:
            return False
        for obj in found:
            self.delete_with_comparator(obj, lambda a, b: a.id == b.id)
        return True

    def delete_with_comparator(
        self, obj: Spatial, condition: Callable[[Spatial, Spatial], bool]
    ) -> bool:
        """Remove the object for which ``condition(stored, obj)`` holds."""
        leaf = self._find_leaf(self._root, obj, condition)
        if leaf is None:
            return False
        index = -1
        for i, entry in enumerate(leaf.entries):
            if condition(entry.obj, obj):
                index = i
        if index < 0:
            return False
        del leaf.entries[index]

        self._condense_tree(leaf)
        self._size -= 1

        if not self._root.leaf and len(self._root.entries) == 1:
            self._root = self._root.entries[0].child
            self._root.parent = None
        if not self._root.leaf and not self._root.entries:
            self._root = _Node(1, leaf=True)
        self._height = self._root.level
        return True

    def _find_leaf(
        self,
        node: _Node,
        obj: Spatial,
        condition: Callable[[Spatial, Spatial], bool],
    ) -> _Node | None:
        if node.leaf:
            return node
        target = bounding_box(obj.geometry)
        for entry in node.entries:
            if not entry.bb.contains(target):
                continue
            leaf = self._find_leaf(entry.child, obj, condition)
            if leaf is None:
                continue
            if any(condition(stored.obj, obj) for stored in leaf.entries):
                return leaf
        return None

    def _condense_tree(self, node: _Node) -> None:
        deleted: list[_Node] = []
        while node is not self._root:
            parent = node.parent
            if len(node.entries) < self.min_children:
                kept = [e for e in parent.entries if e.child is not node]
                if len(kept) == len(parent.entries):
                    raise RuntimeError("failed to remove entry from parent")
                parent.entries = kept
                if node.entries:
                    deleted.append(node)
            else:
                node.entry_in_parent().bb = node.bounding_box()
            node = parent
        for orphan in deleted:
            self._insert(_Entry(orphan.bounding_box(), child=orphan), orphan.level + 1)

    def search_intersect(
        self, box: Box, condition: Callable[[Spatial], bool] | None = None
    ) -> list[Spatial]:
        """Objects whose boxes meet ``box`` and, if given, satisfy ``condition``."""
        return list(self._search(self._root, box, condition))

    def _search(
        self, node: _Node, box: Box, condition: Callable[[Spatial], bool] | None
    ) -> Iterator[Spatial]:
        for entry in node.entries:
            if not entry.bb.intersects(box):
                continue
            if not node.leaf:
                yield from self._search(entry.child, box, condition)
            elif condition is None or condition(entry.obj):
                yield entry.obj

    def search_by_id(self, spatial_id: str) -> list[Spatial]:
        """All objects with the given identifier."""
        return self.search_intersect(
            self._root.bounding_box(), lambda obj: obj.id == spatial_id
        )

    def all_bounding_boxes(self) -> list[Box]:
        """Boxes of all entries in non-leaf nodes."""
        return self._root.all_bounding_boxes()

    def nearest_neighbors(self, k: int, point: Point) -> list[Spatial]:
        """Up to ``k`` objects whose boxes are nearest to ``point``, nearest first."""
        if k <= 0:
            return []
        dists: list[float] = []
        nearest: list[Spatial] = []
        self._nearest(k, point, self._root, dists, nearest)
        return nearest

    def _nearest(
        self,
        k: int,
        point: Point,
        node: _Node,
        dists: list[float],
        nearest: list[Spatial],
    ) -> None:
        if node.leaf:
            for entry in node.entries:
                _insert_nearest(k, dists, nearest, _min_dist(point, entry.bb), entry.obj)
            return
        ranked = sorted(
            ((_min_dist(point, e.bb), e) for e in node.entries), key=lambda t: t[0]
        )
        if len(dists) >= k:
            worst = dists[-1]
            ranked = [(d, e) for d, e in ranked if d <= worst]
        for _, entry in ranked:
            self._nearest(k, point, entry.child, dists, nearest)

    def upsert_by_id(self, *spatials: Spatial) -> None:
        """Replace objects sharing each given object's identifier, or add it."""
        for obj in spatials:
            self.delete_by_id(obj.id)
            self.insert(obj)