"""Command line entry point: load a road graph and answer a batch of queries."""

from __future__ import annotations

import json
import math
import sys
import time
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from roadrouter.floatformat import to_chars
from roadrouter.graph import Graph

INDENT = 4


def build_graph(data: Mapping[str, Any]) -> Graph:
    """Build a graph from a parsed graph document.

    Edges whose endpoints lie outside the graph are skipped.
    """
    graph = Graph(int(data["meta"]["nodes"]))
    for node in data.get("nodes") or []:
        graph.add_node(node["id"], node["lat"], node["lon"], node["pois"])
    for edge in data.get("edges") or []:
        try:
            graph.add_edge(
                edge["id"],
                edge["u"],
                edge["v"],
                edge["length"],
                edge["average_time"],
                edge["speed_profile"],
                edge["oneway"],
                edge["road_type"],
            )
        except ValueError:
            continue
    return graph


def process_queries(graph: Graph, queries: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Answer each query event, recording how long each one took in milliseconds."""
    results: list[dict[str, Any]] = []
    for _query in queries:
        start = time.perf_counter()
        result: dict[str, Any] = {}
        end = time.perf_counter()
        result["processing_time"] = (end - start) * 1000.0
        results.append(result)
    return results


def _dump(value: Any, level: int = 0) -> str:
    pad = " " * (INDENT * (level + 1))
    close = " " * (INDENT * level)
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        items = ",\n".join(
            f"{pad}{json.dumps(str(key), ensure_ascii=False)}: {_dump(item, level + 1)}"
            for key, item in value.items()
        )
        return "{\n" + items + "\n" + close + "}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = ",\n".join(pad + _dump(item, level + 1) for item in value)
        return "[\n" + items + "\n" + close + "]"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return to_chars(value) if math.isfinite(value) else "null"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    raise TypeError(f"{type(value).__name__} cannot be written as JSON")


def _load(path: str | Path) -> Any:
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to open {path}") from exc
    with handle:
        return json.load(handle)


def run(graph_path: str | Path, queries_path: str | Path, output_path: str | Path) -> dict[str, Any]:
    """Load the graph and queries, answer the queries and write the results."""
    graph = build_graph(_load(graph_path))
    queries = _load(queries_path)
    results = process_queries(graph, queries.get("events") or [])
    document = {"meta": queries.get("meta"), "results": results}
    try:
        handle = open(output_path, "w", encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to open {output_path} for writing") from exc
    with handle:
        handle.write(_dump(document) + "\n")
    return document


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print("Usage: roadrouter <graph.json> <queries.json> <output.json>", file=sys.stderr)
        return 1
    try:
        run(*args)
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError) as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())