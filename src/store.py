"""In-memory member store with id lookup and a networkx view of father links."""

from collections.abc import Iterable, Iterator
import logging

import networkx as nx

from models import Member

logger = logging.getLogger(__name__)

FATHER_OF = "FATHER_OF"


class MemberStore:
    """
    Immutable collection of members, kept in the order they were authored.

    Lookups never raise: an unknown id gives None, because dangling father
    references are expected in hand-authored data.
    """

    def __init__(self, members: Iterable[Member]):
        self._members: tuple[Member, ...] = tuple(members)
        self._by_id: dict[str, Member] = {}
        self._children: dict[str, list[Member]] = {}

        for member in self._members:
            if member.id in self._by_id:
                raise ValueError(f"Duplicate member ID: {member.id}")
            self._by_id[member.id] = member

        for member in self._members:
            if member.father_id is not None:
                self._children.setdefault(member.father_id, []).append(member)

        self._graph = self._build_graph()
        logger.debug(
            "Loaded %d members (%d father links)", len(self._members), self._graph.number_of_edges()
        )

    def _build_graph(self) -> nx.DiGraph:
        G = nx.DiGraph()

        # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
        for m in self._members:
            G.add_node(
                m.id,
                person_name=m.name,
                is_deceased=m.is_deceased,
                is_outsider=m.is_outsider,
            )

        # Edges are added in store order so successors keep sibling order
        for m in self._members:
            if m.father_id is not None and m.father_id in self._by_id:
                G.add_edge(m.father_id, m.id, relationship_type=FATHER_OF)

        return nx.freeze(G)

    def find(self, member_id: str | None) -> Member | None:
        if member_id is None:
            return None
        return self._by_id.get(member_id)

    def all(self) -> tuple[Member, ...]:
        return self._members

    def children_of(self, member_id: str) -> tuple[Member, ...]:
        return tuple(self._children.get(member_id, ()))

    @property
    def graph(self) -> nx.DiGraph:
        """Read-only graph with a FATHER_OF edge from each resolvable father to its child."""
        return self._graph

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Member]:
        return iter(self._members)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._by_id
