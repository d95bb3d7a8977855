"""Road network graph with distance- and time-based shortest path search."""

from __future__ import annotations

import heapq
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

SLOT_MINUTES = 15.0
SLOTS_PER_DAY = 96


@dataclass
class Node:
    """A junction of the road network."""

    id: int
    lat: float
    lon: float
    pois: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Edge:
    """A road segment between two nodes."""

    id: int
    u: int
    v: int
    length: float
    average_time: float
    speed_profile: list[float] = field(default_factory=list)
    oneway: bool = False
    road_type: str = ""
    blocked: bool = False

    def other_end(self, node: int) -> int:
        """Return the endpoint opposite to ``node``."""
        if node == self.u:
            return self.v
        if node == self.v:
            return self.u
        raise ValueError(f"node {node} is not an endpoint of edge {self.id}")

    def travel_time(self, start_time: float) -> float:
        """Time to traverse the edge when entering it at ``start_time`` minutes.

        The speed profile holds one speed per 15-minute slot of the day and
        wraps around at midnight. Without a profile the average time is used.
        """
        profile = self.speed_profile
        if not profile:
            return self.average_time
        if not any(speed > 0 for speed in profile):
            raise ValueError(f"edge {self.id} has no positive speed in its profile")

        slot = int(start_time / SLOT_MINUTES)
        window = SLOT_MINUTES - (start_time - slot * SLOT_MINUTES)
        slot %= SLOTS_PER_DAY
        speed = profile[slot]
        needed = self.length / speed if speed > 0 else math.inf
        if needed < window:
            return needed

        elapsed = window
        remaining = self.length - window * speed
        slot = (slot + 1) % SLOTS_PER_DAY
        while True:
            speed = profile[slot]
            if SLOT_MINUTES * speed > remaining:
                return elapsed + remaining / speed
            elapsed += SLOT_MINUTES
            remaining -= SLOT_MINUTES * speed
            slot = (slot + 1) % SLOTS_PER_DAY


class NoPathError(LookupError):
    """Raised when no admissible route joins the two nodes."""


class Graph:
    """A road network of a fixed number of nodes."""

    def __init__(self, node_count: int) -> None:
        if node_count < 0:
            raise ValueError("node count must not be negative")
        self.node_count = node_count
        self._nodes: list[Node | None] = [None] * node_count
        self._network: dict[int, dict[int, list[Edge]]] = {}
        self._roads: dict[int, Edge] = {}

    def _check_node(self, node: int) -> None:
        if not 0 <= node < self.node_count:
            raise ValueError(f"node {node} is outside 0..{self.node_count - 1}")

    def add_node(self, id: int, lat: float, lon: float, pois: Iterable[str] = ()) -> Node:
        self._check_node(id)
        node = Node(id, lat, lon, list(pois))
        self._nodes[id] = node
        return node

    def add_edge(
        self,
        id: int,
        u: int,
        v: int,
        length: float,
        average_time: float,
        speed_profile: Iterable[float] = (),
        oneway: bool = False,
        road_type: str = "",
    ) -> Edge:
        self._check_node(u)
        self._check_node(v)
        edge = Edge(id, u, v, length, average_time, list(speed_profile), oneway, road_type)
        self._network.setdefault(u, {}).setdefault(v, []).append(edge)
        if not oneway:
            self._network.setdefault(v, {}).setdefault(u, []).append(edge)
        self._roads[id] = edge
        return edge

    def remove_edge(self, id: int) -> None:
        """Block the edge; unknown ids are ignored."""
        edge = self._roads.get(id)
        if edge is not None:
            edge.blocked = True

    def modify_edge(
        self,
        id: int,
        length: float | None = None,
        average_time: float | None = None,
        speed_profile: Iterable[float] | None = None,
        road_type: str = "",
    ) -> None:
        """Unblock the edge and update the given attributes; unknown ids are ignored."""
        edge = self._roads.get(id)
        if edge is None:
            return
        edge.blocked = False
        if length is not None and length >= 0:
            edge.length = length
        if average_time is not None and average_time >= 0:
            edge.average_time = average_time
        if speed_profile is not None:
            profile = list(speed_profile)
            if profile:
                edge.speed_profile = profile
        if road_type:
            edge.road_type = road_type

    def edge(self, id: int) -> Edge:
        return self._roads[id]

    def node(self, id: int) -> Node:
        self._check_node(id)
        node = self._nodes[id]
        if node is None:
            raise KeyError(id)
        return node

    def format_edges(self) -> str:
        return "".join(
            f"Edge Id {edge.id} u {edge.u} v {edge.v} length {edge.length:g}\n"
            for _, edge in sorted(self._roads.items())
        )

    def shortest_distance_path(
        self,
        src: int,
        target: int,
        forbidden_nodes: Iterable[int] = (),
        forbidden_road_types: Iterable[str] = (),
    ) -> tuple[float, list[int]]:
        """Return the shortest length and the node path from ``src`` to ``target``."""
        return self._search(
            src, target, forbidden_nodes, forbidden_road_types, lambda edge, _: edge.length
        )

    def shortest_time_path(
        self,
        src: int,
        target: int,
        forbidden_nodes: Iterable[int] = (),
        forbidden_road_types: Iterable[str] = (),
    ) -> tuple[float, list[int]]:
        """Return the quickest travel time and the node path, departing at time 0."""
        return self._search(
            src,
            target,
            forbidden_nodes,
            forbidden_road_types,
            lambda edge, now: edge.travel_time(now),
        )

    def _search(
        self,
        src: int,
        target: int,
        forbidden_nodes: Iterable[int],
        forbidden_road_types: Iterable[str],
        cost: Callable[[Edge, float], float],
    ) -> tuple[float, list[int]]:
        self._check_node(src)
        self._check_node(target)
        forbidden = set(forbidden_nodes)
        banned_types = set(forbidden_road_types)
        settled: dict[int, float] = {}
        via: dict[int, int] = {}
        # Ties go to the larger node id, then the larger edge id.
        heap: list[tuple[float, int, int]] = [(0.0, -src, 1)]

        while heap:
            dist, neg_node, neg_edge = heapq.heappop(heap)
            node = -neg_node
            if node in settled:
                continue
            settled[node] = dist
            via[node] = -neg_edge
            if node == target:
                break
            for neighbour, edges in self._network.get(node, {}).items():
                if neighbour in settled or neighbour in forbidden:
                    continue
                for edge in edges:
                    if edge.blocked or edge.road_type in banned_types:
                        continue
                    heapq.heappush(heap, (dist + cost(edge, dist), -neighbour, -edge.id))

        if target not in settled or target in forbidden:
            raise NoPathError(f"no path from {src} to {target}")

        path = [target]
        node = target
        while node != src:
            node = self._roads[via[node]].other_end(node)
            path.append(node)
        path.reverse()
        return settled[target], path