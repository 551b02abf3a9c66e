"""Unit tests for transcript parsing."""

from __future__ import annotations

import pytest

from committer_lookup.parsing import (
    is_placeholder_range,
    parse_author_lines,
    range_key,
    tally_authors,
)


def _counts(text: str) -> dict[str, int]:
    return {name: r.commit_count for name, r in tally_authors(parse_author_lines(text)).items()}


def test_repeated_author_with_email_is_counted_twice() -> None:
    text = "Author: Alice <alice@example.com>\nAuthor: Alice <alice@example.com>\n"

    assert _counts(text) == {"Alice": 2}


def test_author_without_email() -> None:
    assert _counts("Author: Bob") == {"Bob": 1}


def test_mixed_transcript() -> None:
    assert _counts("Author: A\nAuthor: B <b@x>\nAuthor: A\n") == {"A": 2, "B": 1}


def test_multi_word_names_keep_their_spaces() -> None:
    names = parse_author_lines("Author: Mary Ann Smith <mas@example.com>\n")

    assert names == ["Mary Ann Smith"]


def test_surrounding_whitespace_is_tolerated() -> None:
    names = parse_author_lines("   Author:   Carol   <carol@example.com>  \n\tAuthor: Dave\t\n")

    assert names == ["Carol", "Dave"]


def test_unmatched_lines_are_ignored(sample_transcript: str) -> None:
    assert _counts(sample_transcript) == {"Alice Example": 2, "Bob Builder": 1}


@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n\n",
        "commit 3f1c2a9e5b7d4c6a8e0f1b2c3d4e5f6a7b8c9d0e\n",
        "Date:   Mon Jan 6 10:00:00 2025 -0600\n",
        "Author:\n",
        "Author:    \n",
        "fatal: bad revision 'abc..def'\n",
    ],
)
def test_lines_without_an_author_yield_nothing(text: str) -> None:
    assert parse_author_lines(text) == []


def test_email_is_not_recorded() -> None:
    authors = tally_authors(parse_author_lines("Author: Eve <eve@example.com>"))

    assert authors["Eve"].email is None


def test_range_key_is_concatenation() -> None:
    assert range_key("abc", "def") == "abcdef"


@pytest.mark.parametrize(
    ("hash1", "hash2"),
    [
        ("Unknown", "abc"),
        ("abc", "Unknown"),
        ("unknown", "abc"),
        ("abc", "UNKNOWN"),
        ("xUnKnOwNx", "abc"),
        ("unk", "nown"),
    ],
)
def test_placeholder_range_detection(hash1: str, hash2: str) -> None:
    assert is_placeholder_range(hash1, hash2)


def test_regular_range_is_not_placeholder() -> None:
    assert not is_placeholder_range("3f1c2a9", "0f9e8d7")
