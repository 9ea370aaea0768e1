"""Visualization functions for family tree charts."""

from pathlib import Path

import pydot

from genealogy import bucket_by_generation, find_ancestors, find_descendants
from models import Member
from store import MemberStore


def _member_label(member: Member, generation: int) -> str:
    label = f"{member.name}\nGeneration {generation}"
    if member.is_deceased:
        year = member.death_date[:4] if member.death_date else ""
        label += f"\n(d. {year})" if year else "\n(deceased)"
    return label


def build_chart(store: MemberStore, focus: Member | None = None) -> pydot.Dot:
    """
    Build a hierarchical Graphviz chart of the family tree.

    With a focus member only its ancestor chain and descendant subtree are
    drawn, and the focus is highlighted. Members of one generation share a
    rank so the chart reads top (roots) to bottom.
    """
    if focus is not None:
        shown = {m.id for m in find_ancestors(store, focus)}
        shown.add(focus.id)
        shown.update(m.id for m in find_descendants(store, focus))
    else:
        shown = {m.id for m in store.all()}

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    for generation, members in bucket_by_generation(store).items():
        sg = pydot.Subgraph(f"generation_{generation}", rank="same")
        for member in members:
            if member.id not in shown:
                continue

            if focus is not None and member.id == focus.id:
                fillcolor = "gold"
            elif member.is_deceased:
                fillcolor = "lightgray"
            else:
                fillcolor = "lightblue"

            node = pydot.Node(
                member.id,
                label=_member_label(member, generation),
                shape="box",
                style="rounded,filled",
                fillcolor=fillcolor,
                fontsize="10",
            )
            P.add_node(node)
            sg.add_node(pydot.Node(member.id))
        if sg.get_nodes():
            P.add_subgraph(sg)

    for father_id, child_id in store.graph.edges():
        if father_id in shown and child_id in shown:
            P.add_edge(pydot.Edge(father_id, child_id, color="darkgray"))

    return P


def plot_tree(store: MemberStore, focus: Member | None = None, output_path: Path | None = None):
    """
    Render the family tree chart.

    Args:
        store: The member store to draw
        focus: Optional member whose lineage and descendants are drawn
        output_path: Path to save the output image (PNG, SVG or PDF). If None, displays interactively.
    """
    P = build_chart(store, focus)

    if output_path:
        # Determine format from extension
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf", "dot"):
            ext = "png"

        if ext == "dot":
            output_path.write_text(P.to_string(), encoding="utf-8")
        else:
            P.write(str(output_path), format=ext)
        print(f"Chart saved to {output_path}")
    else:
        # Save to temporary file and display
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            P.write(f.name, format="png")
            img = mpimg.imread(f.name)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
