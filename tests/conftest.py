"""Shared fixtures for seatplan tests."""

from __future__ import annotations

import pytest

from seatplan.models import GuestRecord, TableTypeRequest


def make_guests(count: int, group: str | None = None, prefix: str = "g", seats: int = 1) -> list[GuestRecord]:
    """Build ``count`` guests with ids ``<prefix>1..<prefix>count``."""
    return [
        GuestRecord(id=f"{prefix}{i}", name=f"{prefix.title()} {i}", group_name=group, seats_needed=seats)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def family_and_friends() -> list[GuestRecord]:
    """12 family guests followed by 5 friends, one seat each."""
    return make_guests(12, group="family", prefix="fam") + make_guests(5, group="friends", prefix="fr")


@pytest.fixture
def family_table() -> TableTypeRequest:
    """A single 10-seat table reserved for family."""
    return TableTypeRequest(shape="circle", capacity=10, count=1, group_assignments=["family"])


@pytest.fixture
def open_rounds() -> TableTypeRequest:
    """Three open 10-seat round tables."""
    return TableTypeRequest(shape="circle", capacity=10, count=3)
