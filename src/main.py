"""
1) Load the family member records from the JSON dataset.
2) Validate them (duplicate ids, dangling father links, cycles).
3) Build the member store.
4) Summarize generations, or list members for a search or filter.
5) For a focus member, list ancestors and descendants with relationship labels.
6) Optionally write a lineage certificate, the memorial listing, and a tree chart.
"""

import argparse
import logging
from pathlib import Path
import sys

from config import load_settings
from documents import (
    build_certificate,
    build_memorial,
    with_generations,
    write_certificate_pdf,
    write_memorial_pdf,
)
from genealogy import (
    FILTER_TYPES,
    bucket_by_generation,
    compute_generation,
    deceased_members,
    describe_relatives,
    filter_members,
)
from parsing import load_members
from plotting import plot_tree
from store import MemberStore
from validation import validate_members


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lineage", description="Browse a family lineage and produce its documents."
    )
    parser.add_argument("dataset", nargs="?", type=Path, help="JSON file of member records")
    parser.add_argument("--member", help="ID of the focus member")
    parser.add_argument("--search", default="", help="Filter members by name")
    parser.add_argument("--filter", choices=FILTER_TYPES, default=None)
    parser.add_argument("--generation", type=int, default=0, help="Generation for --filter generation")
    parser.add_argument("--certificate", type=Path, help="Write the focus member's certificate PDF")
    parser.add_argument("--memorial", type=Path, help="Write the deceased members listing PDF")
    parser.add_argument("--chart", type=Path, help="Write a tree chart (png, svg, pdf or dot)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()
    dataset_path = args.dataset or settings.dataset_path

    print(f"Loading dataset: {dataset_path}")
    try:
        members = load_members(dataset_path)
    except (OSError, ValueError) as e:
        print(f"Could not load dataset: {e}", file=sys.stderr)
        return 1

    print("Validating records...")
    warnings = validate_members(members)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    try:
        store = MemberStore(members)
    except ValueError as e:
        print(f"Could not build member store: {e}", file=sys.stderr)
        return 1

    generations = bucket_by_generation(store)
    print(f"  {len(store)} members across {len(generations)} generations")
    for generation, bucket in generations.items():
        print(f"    Generation {generation}: {len(bucket)} members")

    if args.filter or args.search:
        listed = filter_members(store, args.filter or "all", args.generation, args.search)
        print(f"Members ({len(listed)}):")
        for m in listed:
            print(f"  {m.id}: {m.name} (generation {compute_generation(store, m)})")

    focus = None
    if args.member:
        focus = store.find(args.member)
        if focus is None:
            print(f"Member ID {args.member} not found", file=sys.stderr)
            return 1

        print(f"{focus.name} (generation {compute_generation(store, focus)})")
        for relative in describe_relatives(store, focus):
            print(f"  {relative.label}: {relative.member.name}")

    if args.certificate:
        if focus is None:
            print("--certificate needs --member", file=sys.stderr)
            return 1
        certificate = build_certificate(store, focus, settings=settings)
        write_certificate_pdf(certificate, args.certificate)
        print(f"Certificate {certificate.reference} saved to {args.certificate}")

    if args.memorial:
        memorial = build_memorial(with_generations(store, deceased_members(store)), settings=settings)
        write_memorial_pdf(memorial, args.memorial)
        print(f"Memorial listing ({memorial.total_members} members) saved to {args.memorial}")

    if args.chart:
        plot_tree(store, focus, args.chart)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
