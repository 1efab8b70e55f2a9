from __future__ import annotations

import logging
from enum import Enum
from typing import List, Sequence

import networkx as nx
import numpy as np

from ShelfTSP.matrix import WeightedEdge, is_symmetric, satisfies_triangle_inequality, to_edge_list
from ShelfTSP.solvers.base import BaseSolver, ParameterCursor, ParameterDescriptor
from ShelfTSP.utils.taxonomy import AlgorithmFamily, AlgorithmType

logger = logging.getLogger(__name__)

SHORTCUT_PARAMETER = "Edge repetition elimination type"


class ShortcutStrategy(str, Enum):
    FIRST_STARTING_NODE = "FirstStartingNode"
    BEST_STARTING_NODE = "BestStartingNode"
    FAST_BEST_STARTING_NODE = "FastBestStartingNode"


class DisjointSet:
    """Union-find over ``0..n-1`` with union by rank and path compression."""

    def __init__(self, n: int):
        self.parent = list(range(n))
        self.rank = [0] * n

    def find(self, v: int) -> int:
        root = v
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[v] != root:
            self.parent[v], v = root, self.parent[v]
        return root

    def union(self, a: int, b: int) -> bool:
        a = self.find(a)
        b = self.find(b)
        if a == b:
            return False
        if self.rank[a] < self.rank[b]:
            a, b = b, a
        self.parent[b] = a
        if self.rank[a] == self.rank[b]:
            self.rank[a] += 1
        return True


class KruskalApproxSolver(BaseSolver):
    """Doubled-MST 2-approximation for metric instances.

    Builds a minimum spanning tree with Kruskal, doubles its edges so that every
    vertex has even degree, walks an Eulerian circuit over the resulting
    multigraph and shortcuts repeated vertices into a Hamiltonian cycle.
    """

    name = "kruskal_approx"
    type = AlgorithmType.KRUSKAL_APPROX
    family = AlgorithmFamily.APPROXIMATION

    def __init__(self, graph, shortcut_strategy: ShortcutStrategy = ShortcutStrategy.FIRST_STARTING_NODE):
        super().__init__(graph)
        self.shortcut_strategy = ShortcutStrategy(shortcut_strategy)

    def available_parameters(self) -> List[ParameterDescriptor]:
        params = super().available_parameters()
        params.append(
            ParameterDescriptor(
                name=SHORTCUT_PARAMETER,
                description=(
                    "The last step of this algorithm converts an eulerian path to a hamiltonian path.\n"
                    "FirstStartingNode follows the eulerian cycle from its first node and keeps nodes "
                    "the first time they are found (default).\n"
                    "BestStartingNode repeats that process from every position of the eulerian cycle "
                    "and keeps the cheapest result.\n"
                    "FastBestStartingNode removes back-and-forth repetitions before searching for the "
                    "best starting position (faster execution)."
                ),
                values="{" + ",".join(strategy.value for strategy in ShortcutStrategy) + "}",
            )
        )
        return params

    def _consume_parameters(self, cursor: ParameterCursor) -> None:
        super()._consume_parameters(cursor)
        self.shortcut_strategy = ShortcutStrategy.FIRST_STARTING_NODE
        token = cursor.next()
        if token is None:
            return
        try:
            self.shortcut_strategy = ShortcutStrategy(token)
        except ValueError:
            self._reject_token(SHORTCUT_PARAMETER, token)

    def accepts(self) -> bool:
        if not super().accepts():
            return False
        if not satisfies_triangle_inequality(self.dist_matrix):
            return False
        if not is_symmetric(self.dist_matrix):
            logger.warning(
                "Distance matrix is asymmetric; symmetry will be assumed when building the MST."
            )
        return True

    def minimum_spanning_edges(self) -> List[WeightedEdge]:
        edges = [edge for edge in to_edge_list(self.dist_matrix) if edge.u < edge.v]
        edges.sort(key=lambda edge: edge.weight)
        components = DisjointSet(self.n)
        tree: List[WeightedEdge] = []
        for edge in edges:
            if components.union(edge.u, edge.v):
                tree.append(edge)
                if len(tree) == self.n - 1:
                    break
        return tree

    def doubled_tree(self, tree: Sequence[WeightedEdge]) -> nx.MultiGraph:
        multigraph = nx.MultiGraph()
        multigraph.add_nodes_from(range(self.n))
        for edge in tree:
            multigraph.add_edge(edge.u, edge.v, weight=edge.weight)
            multigraph.add_edge(edge.u, edge.v, weight=edge.weight)
        return multigraph

    @staticmethod
    def eulerian_walk(multigraph: nx.MultiGraph, source: int = 0) -> List[int]:
        """Closed walk using every edge once; the input graph is left untouched."""
        remaining = multigraph.copy()
        stack = [source]
        walk: List[int] = []
        while stack:
            v = stack[-1]
            if remaining.degree(v) > 0:
                u = min(remaining.adj[v])
                remaining.remove_edge(v, u)
                stack.append(u)
            else:
                walk.append(stack.pop())
        return walk

    def shortcut(self, walk: Sequence[int], offset: int = 0) -> List[int]:
        """Keep the first occurrence of each vertex reading ``walk`` circularly from ``offset``."""
        seen = np.zeros(self.n, dtype=bool)
        order: List[int] = []
        length = len(walk)
        for i in range(length):
            v = walk[(i + offset) % length]
            if not seen[v]:
                seen[v] = True
                order.append(v)
                if len(order) == self.n:
                    break
        return order

    def best_shortcut(self, walk: Sequence[int]) -> List[int]:
        circular = list(walk)
        if len(circular) > 1 and circular[0] == circular[-1]:
            circular.pop()
        best_order = self.shortcut(circular, 0)
        best_cost = self.cycle_cost(best_order)
        best_offset = 0
        for offset in range(1, len(circular)):
            order = self.shortcut(circular, offset)
            cost = self.cycle_cost(order)
            if cost < best_cost:
                best_cost = cost
                best_order = order
                best_offset = offset
        self.metadata["best_offset"] = best_offset
        return best_order

    @staticmethod
    def compress_walk(walk: Sequence[int]) -> List[int]:
        """Drop ``b, a`` wherever the walk reads ``a, b, a, b``."""
        if not walk:
            return []
        compressed = [walk[0]]
        i = 1
        while i < len(walk):
            if i < len(walk) - 2 and walk[i + 1] == walk[i - 1] and walk[i + 2] == walk[i]:
                i += 2
                continue
            compressed.append(walk[i])
            i += 1
        return compressed

    def compute_cycle(self) -> List[int]:
        self.metadata = {"shortcut_strategy": self.shortcut_strategy.value}
        if self.n == 0:
            return []
        tree = self.minimum_spanning_edges()
        walk = self.eulerian_walk(self.doubled_tree(tree))
        self.metadata["mst_weight"] = float(sum(edge.weight for edge in tree))
        self.metadata["walk_length"] = len(walk)

        if self.shortcut_strategy is ShortcutStrategy.BEST_STARTING_NODE:
            return self.best_shortcut(walk)
        if self.shortcut_strategy is ShortcutStrategy.FAST_BEST_STARTING_NODE:
            compressed = self.compress_walk(walk)
            self.metadata["compressed_walk_length"] = len(compressed)
            return self.best_shortcut(compressed)
        return self.shortcut(walk, 0)


__all__ = ["DisjointSet", "KruskalApproxSolver", "ShortcutStrategy"]
