# roadrouter

A road network graph with shortest-path search. Each node has a position and
a list of points of interest. Each edge has these attributes:

- a length
- an average travel time
- an optional speed profile of 96 fifteen-minute slots, which wraps at midnight
- a one-way flag
- a road type

Routes can be found by distance or by time-dependent travel time. Either
search can avoid given nodes and given road types.

## Installation

```
pip install .
```

## Library use

```python
from roadrouter.graph import Graph, NoPathError

g = Graph(3)
g.add_node(0, 19.07, 72.87, ["cafe"])
g.add_node(1, 19.08, 72.88, [])
g.add_node(2, 19.09, 72.89, [])
g.add_edge(0, 0, 1, 100.0, 10.0, [], False, "primary")
g.add_edge(1, 1, 2, 50.0, 5.0, [], True, "residential")

distance, path = g.shortest_distance_path(0, 2)
print(distance, path)   # 150.0 [0, 1, 2]

try:
    g.shortest_time_path(0, 2, forbidden_road_types=["residential"])
except NoPathError:
    print("no route")
```

### Graph methods

- `Graph.add_node` and `Graph.add_edge` raise `ValueError` when a node id lies
  outside `0 .. node_count - 1`.
- `Graph.remove_edge(id)` blocks a road. Unknown ids are ignored.
- `Graph.modify_edge(id, length, average_time, speed_profile, road_type)`
  unblocks a road and updates each attribute that is given. A negative number,
  an empty profile or an empty road type leaves that attribute unchanged.
- `Graph.edge(id)` and `Graph.node(id)` look up one element.
- `Graph.format_edges()` lists every edge in id order.

### Edge methods

- `Edge.travel_time(start_time)` gives the time to cross the edge when it is
  entered at `start_time` minutes. The speed of each slot applies in turn.
- `Edge.other_end(node)` gives the endpoint opposite to `node`.

`shortest_time_path` departs at time 0.

### Other modules

- `roadrouter.floatformat.to_chars(value)` writes a float in its shortest
  round-trip form, in the style of `%g`. For example, `to_chars(3.0)` gives
  `"3.0"`, `to_chars(0.1)` gives `"0.1"` and `to_chars(1e20)` gives `"1e+20"`.
  It uses `roadrouter.dtoa.grisu2` to produce the digits.
- `roadrouter.pointer_escape` provides `escape` and `unescape` for JSON Pointer
  tokens: `~` becomes `~0` and `/` becomes `~1`.
- `roadrouter.output` provides the sinks `StringSink`, `ListSink` and
  `StreamSink`. `output_adapter(target)` picks the right sink for a target.

## Command line

```
roadrouter graph.json queries.json output.json
```

The command builds a graph from `graph.json`. That file has these parts:

- `meta.nodes`
- `nodes`, each with `id`, `lat`, `lon` and `pois`
- `edges`, each with `id`, `u`, `v`, `length`, `average_time`,
  `speed_profile`, `oneway` and `road_type`

Edges whose endpoints lie outside the graph are skipped.

The command then reads the `events` in `queries.json`. It writes
`output.json`, indented by four spaces, holding the queries' `meta` block and
one result per event. If the arguments are wrong, a file cannot be opened or
the input is invalid, it prints a message to standard error and exits with
status 1.

## What the command does not do

The command does not interpret query events. It runs no route searches for
them and does not apply their changes to the graph. Each result holds only a
`processing_time` in milliseconds. To answer queries, call the `Graph`
methods from your own code.

## Tests

```
pip install .[test]
pytest
```