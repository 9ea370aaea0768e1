"""Dataset validation for family member records."""

from collections import Counter

import networkx as nx

from models import Member


def validate_members(members: list[Member]) -> list[str]:
    """
    Validate member records for:
    - Duplicate IDs
    - Father references that do not resolve
    - Cycles in father links
    - Outsider records that also carry a structural father link

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    counts = Counter(m.id for m in members)
    for member_id, count in counts.items():
        if count > 1:
            warnings.append(f"Duplicate member ID {member_id} appears {count} times")

    ids = set(counts)
    for m in members:
        if m.father_id is not None and m.father_id not in ids:
            warnings.append(f"Unresolved father ID {m.father_id} on {m.name} ({m.id})")
        if m.is_outsider and m.father_id is not None:
            warnings.append(f"Outsider record {m.name} ({m.id}) also has father ID {m.father_id}")

    # Only father links that resolve can take part in a cycle
    father_graph = nx.DiGraph(
        (m.father_id, m.id) for m in members if m.father_id is not None and m.father_id in ids
    )

    try:
        cycle = nx.find_cycle(father_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in father links: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    return warnings
