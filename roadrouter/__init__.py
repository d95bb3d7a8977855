"""Road network graph with shortest paths by distance and time-dependent travel time."""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "dtoa",
    "floatformat",
    "graph",
    "output",
    "pointer_escape",
]