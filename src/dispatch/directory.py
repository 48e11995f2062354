"""Known node identities per node type."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .spec import NodeType


SEED_NODES: Dict[NodeType, Tuple[str, ...]] = {
    NodeType.UE: (
        "imsi-306956963543741",
        "imsi-306950959944062",
        "imsi-208937563328413",
        "imsi-208931340068521",
    ),
    NodeType.GNB: (
        "MSSIM-gnb-001-01-1",
        "MSSIM-gnb-002-01-1",
        "MSSIM-gnb-003-02-1",
        "MSSIM-gnb-003-03-2",
    ),
}


class NodeDirectory(ABC):
    """Source of truth for which node identities exist.

    Implementations may be backed by a live registry; the dispatch code only
    relies on these two calls.
    """

    @abstractmethod
    def exists(self, node_type: NodeType | str, identity: str) -> bool:
        pass

    @abstractmethod
    def list_all(self, node_type: NodeType | str) -> Tuple[str, ...]:
        pass


class StaticNodeDirectory(NodeDirectory):
    """Directory over a fixed set of identities, populated at startup."""

    def __init__(self, nodes: Optional[Mapping[NodeType, Iterable[str]]] = None):
        source = SEED_NODES if nodes is None else nodes
        self._ordered: Dict[NodeType, Tuple[str, ...]] = {}
        for nt in NodeType:
            # keep first occurrence order, drop duplicates
            self._ordered[nt] = tuple(dict.fromkeys(source.get(nt, ())))
        self._members = {nt: frozenset(ids) for nt, ids in self._ordered.items()}

    def exists(self, node_type: NodeType | str, identity: str) -> bool:
        return identity in self._members[NodeType.parse(node_type)]

    def list_all(self, node_type: NodeType | str) -> Tuple[str, ...]:
        return self._ordered[NodeType.parse(node_type)]


__all__ = ["SEED_NODES", "NodeDirectory", "StaticNodeDirectory"]
