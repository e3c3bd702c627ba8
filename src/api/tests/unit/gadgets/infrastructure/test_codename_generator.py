"""Unit tests for WordListCodenameGenerator."""

import re

import pytest

from gadgets.infrastructure.codename_generator import (
    ADJECTIVES,
    ANIMALS,
    WordListCodenameGenerator,
)
from gadgets.ports import CodenameGenerator


def test_implements_protocol():
    assert isinstance(WordListCodenameGenerator(), CodenameGenerator)


def test_codename_shape():
    codename = WordListCodenameGenerator().generate()

    match = re.fullmatch(r"The (\w+) (\w+)", codename)
    assert match is not None
    assert match.group(1) in ADJECTIVES
    assert match.group(2) in ANIMALS


def test_uses_injected_choice():
    generator = WordListCodenameGenerator(
        adjectives=["Silent"], animals=["Falcon"], choice=lambda words: words[0]
    )

    assert generator.generate() == "The Silent Falcon"


def test_word_lists_are_unique():
    assert len(set(ADJECTIVES)) == len(ADJECTIVES)
    assert len(set(ANIMALS)) == len(ANIMALS)


@pytest.mark.parametrize(
    ("adjectives", "animals"), [([], ["Falcon"]), (["Silent"], [])]
)
def test_empty_word_list_is_rejected(adjectives, animals):
    with pytest.raises(ValueError):
        WordListCodenameGenerator(adjectives=adjectives, animals=animals)
