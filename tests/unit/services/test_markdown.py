from __future__ import annotations

import pytest

from openbalti.services.markdown import excerpt, reading_time, slugify, strip_markdown
from openbalti.services.numbers import round_half_up


@pytest.mark.parametrize(
    "title,slug",
    [
        ("Hello World!", "hello-world"),
        ("Balti  --  Grammar", "balti-grammar"),
        ("Numbers 1, 2 & 3", "numbers-1-2-3"),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_reading_time_minimum_one_minute():
    assert reading_time("") == 1
    assert reading_time("word " * 200) == 1
    assert reading_time("word " * 201) == 2


def test_strip_markdown():
    text = "# Title\n**bold** and *it* with [link](http://x) ![img](a.png) `code`"
    assert strip_markdown(text) == "Title\nbold and it with link  code"


def test_excerpt_truncates_with_ellipsis():
    assert excerpt("short") == "short"
    long = "a" * 200
    assert excerpt(long) == "a" * 150 + "..."


@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-0.5, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
