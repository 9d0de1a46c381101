"""Attribute index construction and lookup tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List
from uuid import uuid4

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.attribute_index import AttributeIndex
from models import taxonomy
from models.shirt import Shirt


def _shirt(size, color) -> Shirt:
    return Shirt(id=uuid4(), name=f"{color} - {size}", size=size, color=color)


@pytest.fixture()
def shirts() -> List[Shirt]:
    return [
        _shirt(taxonomy.SMALL, taxonomy.RED),
        _shirt(taxonomy.MEDIUM, taxonomy.RED),
        _shirt(taxonomy.MEDIUM, taxonomy.BLACK),
        _shirt(taxonomy.MEDIUM, taxonomy.BLUE),
        _shirt(taxonomy.LARGE, taxonomy.BLUE),
    ]


def test_every_shirt_lands_in_exactly_one_bucket(shirts: List[Shirt]) -> None:
    index = AttributeIndex.build(shirts, lambda shirt: shirt.size, attribute="size")

    bucketed = [shirt for size in taxonomy.SIZES for shirt in index.lookup(size)]
    assert sorted(s.id for s in bucketed) == sorted(s.id for s in shirts)
    assert index.item_count == len(shirts)


def test_buckets_preserve_source_order(shirts: List[Shirt]) -> None:
    index = AttributeIndex.build(shirts, lambda shirt: shirt.size)
    assert index.lookup(taxonomy.MEDIUM) == (shirts[1], shirts[2], shirts[3])


def test_values_without_shirts_have_no_bucket(shirts: List[Shirt]) -> None:
    index = AttributeIndex.build(shirts, lambda shirt: shirt.color, attribute="color")

    assert len(index) == 3
    assert taxonomy.YELLOW not in index
    assert taxonomy.YELLOW.key not in index.keys()
    assert index.lookup(taxonomy.YELLOW) == ()
    assert index.lookup(taxonomy.WHITE) == ()


def test_empty_catalog_builds_empty_index() -> None:
    index = AttributeIndex.build([], lambda shirt: shirt.size)
    assert len(index) == 0
    assert index.lookup(taxonomy.SMALL) == ()


def test_buckets_cannot_be_mutated(shirts: List[Shirt]) -> None:
    index = AttributeIndex.build(shirts, lambda shirt: shirt.color)
    bucket = index.lookup(taxonomy.RED)

    assert isinstance(bucket, tuple)
    with pytest.raises(TypeError):
        index._buckets[taxonomy.RED.key] = ()  # type: ignore[index]
