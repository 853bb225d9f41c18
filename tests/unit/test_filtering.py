"""Tests for fuzzy filtering of names and records."""

from __future__ import annotations

import json

import pytest

from dynamit.shared.filtering import (
    filter_names,
    filter_records,
    fuzzy_match,
    highlight_indices,
    record_matches,
)

NAMES = ["Alice", "Bob", "Carol"]


class TestFuzzyMatch:
    def test_subsequence_matches_case_insensitively(self):
        matched, indices = fuzzy_match("AlC", "alice")
        assert matched is True
        assert indices == [0, 1, 3]

    def test_out_of_order_does_not_match(self):
        assert fuzzy_match("la", "alice") == (False, [])

    def test_empty_pattern_matches_everything(self):
        assert fuzzy_match("", "anything") == (True, [])

    def test_longer_pattern_than_text(self):
        assert fuzzy_match("alices", "alice")[0] is False


class TestFilterNames:
    def test_subsequence_keeps_raw_order(self):
        assert filter_names(NAMES, "ali") == ["Alice"]
        # "Carol" holds a, l in order too.
        assert filter_names(NAMES, "al") == ["Alice", "Carol"]

    def test_empty_filter_is_identity(self):
        assert filter_names(NAMES, "") == NAMES
        assert filter_names(NAMES, "   ") == NAMES

    def test_all_keywords_must_match(self):
        assert filter_names(["orders-prod", "orders-dev", "users-prod"], "ord prod") == ["orders-prod"]

    def test_no_match(self):
        assert filter_names(NAMES, "zz") == []


class TestFilterRecords:
    def test_matches_object_keys(self):
        records = [json.dumps({"email": "x"}), json.dumps({"name": "y"})]
        assert filter_records(records, "mail") == [records[0]]

    def test_matches_nested_scalars(self):
        records = [
            json.dumps({"id": 1, "profile": {"tags": ["vip", "beta"]}}),
            json.dumps({"id": 2, "profile": {"tags": ["trial"]}}),
        ]
        assert filter_records(records, "vip") == [records[0]]

    def test_numbers_and_booleans_by_string_form(self):
        records = [json.dumps({"n": 1234}), json.dumps({"flag": True}), json.dumps({"n": 5})]
        assert filter_records(records, "23") == [records[0]]
        assert filter_records(records, "true") == [records[1]]

    def test_null_matches_nothing(self):
        records = [json.dumps({"x": None})]
        assert filter_records(records, "null") == []

    def test_invalid_json_never_matches(self):
        records = ["{not json", json.dumps({"name": "bob"})]
        assert filter_records(records, "b") == [records[1]]

    def test_invalid_json_survives_empty_filter(self):
        records = ["{not json"]
        assert filter_records(records, "") == records

    def test_keywords_can_hit_different_fields(self):
        record = json.dumps({"city": "Oslo", "country": "Norway"})
        assert record_matches(record, ["oslo", "norw"]) is True
        assert record_matches(record, ["oslo", "sweden"]) is False


class TestFilterProperties:
    RECORDS = [
        json.dumps({"id": f"user-{i}", "team": team, "score": i * 7})
        for i, team in enumerate(["red", "blue", "green", "red", "amber"])
    ]

    @pytest.mark.parametrize("text", ["", "red", "u 1", "blue 7", "zz"])
    def test_idempotent(self, text):
        once = filter_records(self.RECORDS, text)
        assert filter_records(once, text) == once

    @pytest.mark.parametrize(
        "smaller, larger",
        [("red", "red user"), ("u", "u 2 e"), ("", "green")],
    )
    def test_more_keywords_never_match_more(self, smaller, larger):
        narrow = filter_records(self.RECORDS, larger)
        wide = filter_records(self.RECORDS, smaller)
        assert set(narrow) <= set(wide)

    def test_filtered_view_is_ordered_subsequence(self):
        filtered = filter_records(self.RECORDS, "e")
        positions = [self.RECORDS.index(record) for record in filtered]
        assert positions == sorted(positions)


def test_highlight_indices_merges_keywords():
    assert highlight_indices("orders-prod", "ord prod") == [0, 1, 2, 7, 8, 9, 10]
