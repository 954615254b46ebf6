"""Drawing of shortest-path trees with NetworkX + Matplotlib.

Example usage:

```python
sp = shortest_paths(graph, weights, graph.vertex("0"))
ax = draw_tree(sp, show_weights=True)
ax.figure.savefig("tree.png")
```
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import matplotlib.pyplot as plt
import networkx as nx

from .convert import node_key
from .engine import ShortestPaths
from .exceptions import ConfigError
from .export import tree_edges

_LAYOUTS = {
    "spring": lambda G: nx.spring_layout(G, seed=0),
    "circular": nx.circular_layout,
    "shell": nx.shell_layout,
}


def draw_tree(
    sp: ShortestPaths,
    ax: Optional[Any] = None,
    *,
    layout: str = "spring",
    show_weights: bool = False,
    node_size: int = 300,
):
    """Draw the graph in grey with the shortest-path tree highlighted.

    The start vertex is drawn in red, reachable vertices in blue and
    unreachable ones in light grey.

    Args:
        sp: Engine on which ``run()`` has completed.
        ax: Matplotlib axes to draw on; a new figure is created if ``None``.
        layout: ``"spring"``, ``"circular"`` or ``"shell"``.
        show_weights: Label tree edges with their weights.
        node_size: Node marker size.

    Returns:
        The axes drawn on.
    """
    if layout not in _LAYOUTS:
        raise ConfigError(f"unknown layout {layout!r}")
    vertices = list(sp.graph.vertices())
    G = nx.DiGraph()
    G.add_nodes_from(node_key(v) for v in vertices)
    for v in vertices:
        for e in sp.graph.edges_from(v):
            G.add_edge(node_key(e.tail), node_key(e.head))

    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))
    pos = _LAYOUTS[layout](G)

    start = node_key(sp.start)
    colors = []
    for v in vertices:
        if node_key(v) == start:
            colors.append("tab:red")
        elif sp.is_reachable(v):
            colors.append("tab:blue")
        else:
            colors.append("lightgrey")

    tree = tree_edges(sp)
    tree_pairs = [(node_key(e.tail), node_key(e.head)) for e, _ in tree]
    nx.draw_networkx_nodes(
        G, pos, ax=ax, nodelist=[node_key(v) for v in vertices], node_color=colors, node_size=node_size
    )
    nx.draw_networkx_labels(G, pos, ax=ax, font_size=8)
    nx.draw_networkx_edges(G, pos, ax=ax, edge_color="lightgrey", arrows=True)
    nx.draw_networkx_edges(
        G, pos, ax=ax, edgelist=tree_pairs, edge_color="tab:blue", width=2.0, arrows=True
    )
    if show_weights:
        labels: Dict[Any, int] = {(node_key(e.tail), node_key(e.head)): w for e, w in tree}
        nx.draw_networkx_edge_labels(G, pos, ax=ax, edge_labels=labels, font_size=7)
    ax.set_title(f"Shortest-path tree from {start}")
    ax.set_axis_off()
    return ax


__all__ = ["draw_tree"]
