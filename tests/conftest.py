import json

import pytest

from models import Member
from store import MemberStore


@pytest.fixture
def chain_store():
    """A -> B -> C, a single straight lineage."""
    return MemberStore(
        [
            Member(id="A", name="Abdul Karim", father_id=None, is_deceased=True),
            Member(id="B", name="Abdul Rahim", father_id="A", is_deceased=True),
            Member(id="C", name="Mohammad Yusuf", father_id="B"),
        ]
    )


@pytest.fixture
def branching_store():
    """R has children C1 and C2; each has one child."""
    return MemberStore(
        [
            Member(id="R", name="Root"),
            Member(id="C1", name="First Child", father_id="R"),
            Member(id="C2", name="Second Child", father_id="R"),
            Member(id="G1", name="First Grandchild", father_id="C1"),
            Member(id="G2", name="Second Grandchild", father_id="C2"),
        ]
    )


@pytest.fixture
def dangling_store():
    return MemberStore(
        [
            Member(id="X", name="Orphaned Record", father_id="missing-id"),
            Member(id="Y", name="Son Of Orphan", father_id="X"),
        ]
    )


@pytest.fixture
def dataset_records():
    return [
        {"id": "A", "name": "Abdul Karim", "fatherId": None, "isDeceased": True, "deathDate": "1961-04-02"},
        {"id": "B", "name": "Abdul Rahim", "fatherId": "A", "isDeceased": True},
        {"id": "C", "name": "Mohammad Yusuf", "fatherId": "B", "isDeceased": False},
        {"id": "D", "name": "Mohammad Idris", "fatherId": "B", "isDeceased": False},
    ]


@pytest.fixture
def dataset_file(tmp_path, dataset_records):
    path = tmp_path / "family.json"
    path.write_text(json.dumps(dataset_records), encoding="utf-8")
    return path
