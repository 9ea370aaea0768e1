"""Generation, ancestor and descendant queries over a MemberStore."""

import logging

import networkx as nx

from models import Member, Relative
from store import MemberStore

logger = logging.getLogger(__name__)

FILTER_TYPES = ("all", "generation", "deceased")

SUGGESTION_MIN_LENGTH = 2
SUGGESTION_LIMIT = 5

ANCESTOR_LABELS = {
    1: "पिता/अब्बा (Father)",
    2: "दादा/बाबा (Grandfather)",
    3: "पड़दादा (Great Grandfather)",
    4: "परदादा (Great Great Grandfather)",
    5: "बड़े परदादा (Ancient Grandfather)",
}

DESCENDANT_LABELS = {
    1: "बेटा (Son)",
    2: "पोता (Grandson)",
    3: "परपोता (Great Grandson)",
    4: "बड़े परपोता (Great Great Grandson)",
    5: "पांचवी पीढ़ी का पोता (5th Generation Grandson)",
}


def _walk_fathers(store: MemberStore, member: Member):
    """Yield each resolvable father of `member`, nearest first."""
    seen = {member.id}
    current = member
    while current.father_id is not None:
        father = store.find(current.father_id)
        if father is None:
            logger.debug("Unresolved father %r for member %s", current.father_id, current.id)
            return
        if father.id in seen:
            logger.warning("Cycle in father links at member %s; stopping", father.id)
            return
        seen.add(father.id)
        yield father
        current = father


def find_ancestors(store: MemberStore, member: Member) -> list[Member]:
    """
    Return the ancestor chain of `member`, nearest first.

    The chain ends at a root or at the first father_id that does not
    resolve in the store. A root gives an empty list.
    """
    return list(_walk_fathers(store, member))


def compute_generation(store: MemberStore, member: Member) -> int:
    """Count resolvable father links between `member` and its root."""
    return sum(1 for _ in _walk_fathers(store, member))


def generation_of(store: MemberStore, member_id: str) -> int | None:
    member = store.find(member_id)
    if member is None:
        return None
    return compute_generation(store, member)


def bucket_by_generation(store: MemberStore) -> dict[int, list[Member]]:
    """
    Group every member by generation number.

    Keys are in ascending order; within a bucket members keep store order.
    """
    buckets: dict[int, list[Member]] = {}
    for member in store.all():
        buckets.setdefault(compute_generation(store, member), []).append(member)
    return dict(sorted(buckets.items()))


def find_descendants(store: MemberStore, member: Member) -> list[Member]:
    """
    Return every member descending from `member` in pre-order.

    Each child is followed by its whole subtree before the next sibling;
    siblings keep store order. The member itself is never included.
    """
    G = store.graph
    if member.id not in G:
        return []

    # dfs_preorder_nodes walks an explicit stack, so depth is bounded by memory only
    nodes = nx.dfs_preorder_nodes(G, source=member.id)
    return [store.find(node_id) for node_id in nodes if node_id != member.id]


def relationship_label(distance: int, is_ancestor: bool) -> str:
    """Map a generation distance to the display label for that relationship."""
    distance = abs(distance)
    if distance < 1:
        raise ValueError(f"Generation distance must be at least 1, got {distance}")

    labels = ANCESTOR_LABELS if is_ancestor else DESCENDANT_LABELS
    if distance in labels:
        return labels[distance]
    if is_ancestor:
        return f"{distance} पीढ़ी के बुज़ुर्ग ({distance} Generation Elder)"
    return f"{distance} पीढ़ी के वंशज ({distance} Generation Descendant)"


def describe_relatives(store: MemberStore, member: Member) -> list[Relative]:
    """
    List the ancestors, then the descendants, of a focus member with their labels.

    Distance is the number of father links between the focus and the
    relative, so members on a father-link cycle still get a distance of 1 or more.
    """
    relatives: list[Relative] = []

    for index, ancestor in enumerate(find_ancestors(store, member)):
        relatives.append(_relative(store, ancestor, index + 1, True))

    descendants = find_descendants(store, member)
    if descendants:
        depths = nx.single_source_shortest_path_length(store.graph, member.id)
        for descendant in descendants:
            relatives.append(_relative(store, descendant, depths[descendant.id], False))

    return relatives


def _relative(store: MemberStore, other: Member, distance: int, is_ancestor: bool) -> Relative:
    return Relative(
        member=other,
        generation=compute_generation(store, other),
        distance=distance,
        is_ancestor=is_ancestor,
        label=relationship_label(distance, is_ancestor),
    )


def search_members(
    store: MemberStore, term: str, exclude_id: str | None = None, limit: int | None = None
) -> list[Member]:
    """
    Case-insensitive name search in store order.

    With a `limit` the search behaves like the suggestion box: terms shorter
    than two characters give nothing.
    """
    term = term.strip().lower()
    if not term or (limit is not None and len(term) < SUGGESTION_MIN_LENGTH):
        return []

    matches = [m for m in store.all() if term in m.name.lower() and m.id != exclude_id]
    return matches if limit is None else matches[:limit]


def suggest_members(store: MemberStore, term: str, focus: Member | None = None) -> list[Member]:
    return search_members(
        store, term, exclude_id=focus.id if focus else None, limit=SUGGESTION_LIMIT
    )


def deceased_members(store: MemberStore) -> list[Member]:
    return [m for m in store.all() if m.is_deceased]


def filter_members(
    store: MemberStore, filter_type: str = "all", generation_level: int = 0, term: str = ""
) -> list[Member]:
    """
    Select members for browsing.

    "all" is narrowed by the search term; "generation" and "deceased"
    ignore it, matching the browsing list of the family tree view.
    """
    if filter_type == "generation":
        return bucket_by_generation(store).get(generation_level, [])
    if filter_type == "deceased":
        return deceased_members(store)
    if filter_type == "all":
        return search_members(store, term) if term.strip() else list(store.all())
    raise ValueError(f"Unknown filter type {filter_type!r}; expected one of {FILTER_TYPES}")
