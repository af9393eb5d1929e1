"""Tests for ad slot placement."""

import pytest

from quoteboard.services.ads import place_ads


def test_every_third_item() -> None:
    assert place_ads(list(range(10)), 3) == [2, 5, 8]


@pytest.mark.parametrize("frequency", [0, -1, -10])
def test_non_positive_frequency_disables_ads(frequency: int) -> None:
    assert place_ads(list(range(10)), frequency) == []


def test_frequency_one_places_after_every_item() -> None:
    assert place_ads(["a", "b", "c"], 1) == [0, 1, 2]


def test_fewer_items_than_frequency() -> None:
    assert place_ads(["a", "b"], 3) == []


def test_depends_only_on_length() -> None:
    assert place_ads(["x"] * 7, 2) == place_ads(range(7), 2) == [1, 3, 5]
