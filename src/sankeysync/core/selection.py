"""
Box selection and the cascading filter.

State
- ``SelectionState`` is an immutable pair (selected_boxes, filtered). The pure
  functions below return new states; ``SelectionEngine`` is the one mutable
  container that owns the current state and notifies the host.

Cascading filter (``recompute_filter``)
1. No selected boxes: the result is empty.
2. Selected nodes are grouped by attribute; within a group their records are
   unioned (OR).
3. Group unions are intersected by record identity (AND).
4. A single group returns its union directly.
The result is ordered by record index.

Stale keys
- After a rebuild, keys that no longer exist are dropped by ``prune_invalid``;
  the filter is recomputed only when something was dropped.

Examples:
    >>> from sankeysync.core.records import make_records
    >>> from sankeysync.core.graph import build_graph
    >>> from sankeysync.core.keys import NodeKey
    >>> rs = make_records([{"bedrooms": 2, "parking": 1}, {"bedrooms": 2, "parking": 0}])
    >>> g = build_graph(rs, ["bedrooms", "parking"])
    >>> s = toggle_box(SelectionState(), NodeKey.of("bedrooms", 2), g)
    >>> [r.index for r in s.filtered]
    [0, 1]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .graph import FlowGraph
from .keys import NodeKey
from .records import Record
from .typing import FilterCallback

__all__ = [
    "SelectionState",
    "SelectionEngine",
    "recompute_filter",
    "toggle_box",
    "prune_invalid",
    "clear_boxes",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    """
    Box selection and its derived record filter.

    Attributes:
        selected_boxes (frozenset[NodeKey]): User-toggled nodes.
        filtered (tuple[Record, ...]): Cascading-filter result, ordered by index.
    """

    selected_boxes: frozenset[NodeKey] = frozenset()
    filtered: tuple[Record, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.selected_boxes


def recompute_filter(selected_boxes: Iterable[NodeKey], graph: FlowGraph) -> tuple[Record, ...]:
    """Apply OR-within-attribute, AND-across-attributes over the selected nodes.

    Keys absent from ``graph`` are ignored.

    Args:
        selected_boxes (Iterable[NodeKey]): Selected node keys.
        graph (FlowGraph): Current graph.

    Returns:
        tuple[Record, ...]: Matching records ordered by index.
    """
    by_attribute: dict[str, dict[int, Record]] = {}
    for key in selected_boxes:
        if not graph.has_node(key):
            continue
        group = by_attribute.setdefault(key.attribute, {})
        for house in graph.node(key).houses:
            group[house.index] = house

    if not by_attribute:
        return ()

    groups = list(by_attribute.values())
    if len(groups) == 1:
        result = groups[0]
    else:
        common = set(groups[0])
        for group in groups[1:]:
            common &= group.keys()
        result = {i: groups[0][i] for i in common}

    logger.debug(
        "filter: %d attribute group(s) -> %d record(s)",
        len(groups),
        len(result),
    )
    return tuple(result[i] for i in sorted(result))


def toggle_box(state: SelectionState, key: NodeKey, graph: FlowGraph) -> SelectionState:
    """Add ``key`` if absent, remove it if present, and recompute the filter."""
    boxes = set(state.selected_boxes)
    if key in boxes:
        boxes.remove(key)
    else:
        boxes.add(key)
    frozen = frozenset(boxes)
    return SelectionState(selected_boxes=frozen, filtered=recompute_filter(frozen, graph))


def prune_invalid(
    state: SelectionState, valid_keys: Iterable[NodeKey], graph: FlowGraph
) -> tuple[SelectionState, frozenset[NodeKey]]:
    """Drop selected keys not in ``valid_keys``.

    Returns:
        tuple[SelectionState, frozenset[NodeKey]]: New state and the dropped keys.
        The state is returned unchanged (same object) when nothing was dropped.
    """
    valid = set(valid_keys)
    dropped = frozenset(k for k in state.selected_boxes if k not in valid)
    if not dropped:
        return state, dropped
    kept = state.selected_boxes - dropped
    logger.debug("pruned stale selection keys: %s", sorted(str(k) for k in dropped))
    return SelectionState(selected_boxes=kept, filtered=recompute_filter(kept, graph)), dropped


def clear_boxes(state: SelectionState) -> SelectionState:
    """Empty the box selection (the filter result becomes empty)."""
    return replace(state, selected_boxes=frozenset(), filtered=())


class SelectionEngine:
    """Owns the mutable box selection and reports filter changes to the host.

    Args:
        on_filter_changed (FilterCallback | None): Called with the new filter
            result after every recompute unless the caller passes ``notify=False``.
    """

    def __init__(self, on_filter_changed: FilterCallback | None = None) -> None:
        self._state = SelectionState()
        self._on_filter_changed = on_filter_changed

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected_boxes(self) -> frozenset[NodeKey]:
        return self._state.selected_boxes

    @property
    def filtered(self) -> tuple[Record, ...]:
        return self._state.filtered

    def _emit(self, notify: bool) -> None:
        if notify and self._on_filter_changed is not None:
            self._on_filter_changed(list(self._state.filtered))

    def toggle_box(self, key: NodeKey, graph: FlowGraph, *, notify: bool = True) -> None:
        self._state = toggle_box(self._state, key, graph)
        self._emit(notify)

    def prune_invalid(
        self, valid_keys: Iterable[NodeKey], graph: FlowGraph, *, notify: bool = True
    ) -> frozenset[NodeKey]:
        self._state, dropped = prune_invalid(self._state, valid_keys, graph)
        if dropped:
            self._emit(notify)
        return dropped

    def clear(self, *, notify: bool = True) -> None:
        self._state = clear_boxes(self._state)
        self._emit(notify)

    def recompute(self, graph: FlowGraph, *, notify: bool = True) -> None:
        """Recompute the filter for the current boxes against ``graph``."""
        self._state = replace(
            self._state, filtered=recompute_filter(self._state.selected_boxes, graph)
        )
        self._emit(notify)
