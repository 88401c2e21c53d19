"""Test object identifier generation."""

import re

import pytest

from md2slides.ids import IdentifierGenerator

SLIDES_ID_RE = re.compile(r"^[a-zA-Z0-9_][a-zA-Z0-9_\-:]{4,49}$")


def test_ids_never_repeat_even_when_drawn_back_to_back():
    gen = IdentifierGenerator(prefix="deck")
    ids = [gen.next_id(kind) for _ in range(500) for kind in ("slide", "title", "body")]

    assert len(set(ids)) == len(ids)


def test_same_kind_gets_distinct_ids():
    gen = IdentifierGenerator(prefix="deck")

    assert gen.next_id("slide") != gen.next_id("slide")


def test_ids_are_valid_slides_object_ids():
    gen = IdentifierGenerator()
    for kind in ("slide", "title", "body"):
        assert SLIDES_ID_RE.match(gen.next_id(kind))


def test_default_prefixes_differ_between_generators():
    assert IdentifierGenerator().prefix != IdentifierGenerator().prefix


@pytest.mark.parametrize("prefix", ["has space", "dash-ed", ""])
def test_invalid_prefix_rejected(prefix):
    with pytest.raises(ValueError):
        IdentifierGenerator(prefix=prefix)


def test_invalid_kind_rejected():
    with pytest.raises(ValueError):
        IdentifierGenerator(prefix="deck").next_id("bad kind")
