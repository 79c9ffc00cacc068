from collections import Counter

import pytest

from rxmanager.services.rx_layout import (
    MealRelation,
    ResolvedEntry,
    RxInputError,
    TimeOfDay,
    group_by_time,
)

M, A, N = TimeOfDay.MORNING, TimeOfDay.AFTERNOON, TimeOfDay.NIGHT


def entry(name, *times, **kw):
    return ResolvedEntry(times=tuple(times), name=name, **kw)


def test_entry_with_many_tags_lands_in_each_bucket():
    a = entry("A", M, N)
    b = entry("B", A)
    c = entry("C", M, A, N)

    buckets = group_by_time([a, b, c])

    assert buckets[M] == [a, c]
    assert buckets[A] == [b, c]
    assert buckets[N] == [a, c]


def test_union_of_buckets_matches_entry_tags():
    entries = [
        entry("A", M),
        entry("B", N, A),
        entry("C", A, M, N),
        entry("D", N),
    ]
    buckets = group_by_time(entries)

    got = Counter((id(e), tag) for tag, items in buckets.items()
                  for e in items)
    want = Counter((id(e), tag) for e in entries for tag in e.times)
    assert got == want


def test_empty_tags_are_absent_not_empty():
    buckets = group_by_time([entry("A", N)])
    assert list(buckets) == [N]
    assert M not in buckets


def test_no_entries_gives_no_buckets():
    assert group_by_time([]) == {}


def test_duplicate_tag_counts_once():
    a = entry("A", M, M)
    assert group_by_time([a])[M] == [a]


def test_entry_without_time_of_day_is_rejected():
    with pytest.raises(RxInputError):
        group_by_time([entry("A", M), entry("B")])


def test_fallback_chain_picks_first_present_source():
    assert entry("A", M, instruction="1 tab", legacy_dosage="2 tab",
                 catalog_dosage="500 mg").dosage_text == "1 tab"
    assert entry("A", M, instruction="  ", legacy_dosage="2 tab",
                 catalog_dosage="500 mg").dosage_text == "2 tab"
    assert entry("A", M, catalog_dosage="500 mg").dosage_text == "500 mg"
    assert entry("A", M).dosage_text == "As directed"


def test_missing_medicine_name_uses_placeholder():
    assert ResolvedEntry(times=(M, )).display_name == "Unknown Medicine"


@pytest.mark.parametrize("raw,expected", [
    (None, MealRelation.NONE),
    ("", MealRelation.NONE),
    ("none", MealRelation.NONE),
    ("Before", MealRelation.BEFORE),
    ("after", MealRelation.AFTER),
])
def test_meal_relation_parse(raw, expected):
    assert MealRelation.parse(raw) is expected


def test_unknown_time_of_day_is_rejected():
    with pytest.raises(RxInputError):
        TimeOfDay.parse("evening")
