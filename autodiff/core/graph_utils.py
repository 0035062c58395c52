"""
Graph inspection helpers: statistics over a tape and printable dumps of a
node's subgraph.
"""

from collections import Counter
from typing import Dict, List, Optional

import numpy as np

from . import tape as tape_mod
from .engine import reachable
from .node import Node


def _tape(tape):
    return tape if tape is not None else tape_mod.global_tape


def get_graph_stats(tape: Optional[tape_mod.Tape] = None) -> Dict:
    """
    Statistics over the live nodes of a tape (default: the active one).

    Fan-in is the number of child edges of a node, fan-out its reference
    count (parent edges plus handles).
    """
    nodes = list(_tape(tape))
    if not nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    fan_ins = [len(node.children) for node in nodes]
    fan_outs = [node.ref_count for node in nodes]
    op_counter = Counter(node.op.name for node in nodes)

    return {
        'nodes': len(nodes),
        'edges': sum(fan_ins),
        'leaves': sum(1 for node in nodes if node.is_leaf),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(tape: Optional[tape_mod.Tape] = None) -> Dict:
    """Print the summary of `get_graph_stats` and return the stats."""
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")
    return stats


def _short_id(node: Optional[Node]) -> str:
    return f"#{node.id:02X}" if node is not None else "   "


def describe(node: Node) -> str:
    """One-line description: id, operation, children, value, grad, refs."""
    kids = list(node.children) + [None] * (2 - len(node.children))
    return (
        f"node(id: {_short_id(node)}, func: {node.op.name}, "
        f"l/r: {_short_id(kids[0])}/{_short_id(kids[1])}, "
        f"v: {node.value}, d: {node.grad}, ref: {node.ref_count})"
    )


def format_graph(root: Node) -> str:
    """
    Multi-line dump of the subgraph below `root`: one line per node, then one
    line per edge labelled with the consuming operation.
    """
    lines: List[str] = []
    edges: List[str] = []
    for node in reachable(root):
        lines.append(describe(node))
        for child in node.children:
            edges.append(f"{_short_id(child)} ---{node.op.name}--> {_short_id(node)}")
    return "\n".join(lines + edges)
