# planeframe/kernel/dof.py
"""
DOF MANAGER: Node Id to Global DOF Indexing
===========================================

PURPOSE:
--------
This module maps (node_id, local_dof) to global DOF indices.

Node ids are user-facing labels: they need not start at 0, be contiguous
or be sorted. The global matrices are indexed by the node's POSITION in the
node list instead:

    global_dof = node_array_index * 3 + local_dof      (0=ux, 1=uy, 2=rz)

The id -> position map is built once per solve so every lookup is O(1).

USAGE:
------
    dof = DOFManager.from_nodes(nodes)

    dof.ndof                        # 3 * len(nodes)
    dof.idx(node_id=7, local_dof=1) # uy of node 7
    dof.element_dof_map(4, 7)       # 6-entry scatter/gather table
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

DOF_PER_NODE = 3  # ux, uy, rz


@dataclass
class DOFManager:
    """
    Manages degree-of-freedom indexing for one solve.

    Attributes:
    -----------
    node_ids : List[int]
        Node ids in array order. Array position decides the DOF block.
    dof_per_node : int
        3 for a 2D frame (ux, uy, rz)

    Examples:
    ---------
    >>> dof = DOFManager([10, 20, 30])
    >>> dof.idx(20, 0)
    3
    >>> dof.element_dof_map(10, 30)
    [0, 1, 2, 6, 7, 8]
    >>> dof.ndof
    9
    """
    node_ids: List[int]
    dof_per_node: int = DOF_PER_NODE
    _index: Dict[int, int] = field(init=False, repr=False)

    def __post_init__(self):
        self._index = {node_id: i for i, node_id in enumerate(self.node_ids)}

    @classmethod
    def from_nodes(cls, nodes: Iterable, dof_per_node: int = DOF_PER_NODE) -> "DOFManager":
        return cls([n.id for n in nodes], dof_per_node)

    @property
    def ndof(self) -> int:
        """Total number of DOFs (size of K)."""
        return self.dof_per_node * len(self.node_ids)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._index

    def index_of(self, node_id: int) -> Optional[int]:
        """Array position of a node, or None for an unknown id."""
        return self._index.get(node_id)

    def idx(self, node_id: int, local_dof: int) -> int:
        """
        Global DOF index for a node's local DOF.

        Raises KeyError for an unknown node id; callers filter dangling
        references before indexing.
        """
        return self.dof_per_node * self._index[node_id] + local_dof

    def node_dofs(self, node_id: int) -> List[int]:
        """
        All global DOF indices of one node.

        >>> DOFManager([5, 6]).node_dofs(6)
        [3, 4, 5]
        """
        base = self.dof_per_node * self._index[node_id]
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, *node_ids: int) -> List[int]:
        """
        Scatter/gather table for an element: element-local DOF -> global DOF.

        Recomputed per element; it is a translation table, not an object
        with identity.
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result

    def restrained_dofs(self, nodes: Iterable) -> List[int]:
        """Global indices of every restrained DOF, in node order."""
        fixed = []
        for node in nodes:
            base = self.dof_per_node * self._index[node.id]
            for local_dof, is_fixed in enumerate(node.restraints):
                if is_fixed:
                    fixed.append(base + local_dof)
        return fixed
