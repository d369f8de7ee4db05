"""Tests for InputSanitizer."""

import pytest

from radar_spine.models import NormalizedBlip
from radar_spine.sanitizer import InputSanitizer

HEADER = ["name", "ring", "quadrant", "isNew", "description", "topic"]


@pytest.fixture
def sanitizer():
    return InputSanitizer()


class TestSanitize:
    def test_trims_every_field(self, sanitizer):
        blip = sanitizer.sanitize(
            {
                " name ": "  Python ",
                "ring": " Adopt",
                "quadrant": "languages ",
                "isNew": " true ",
                "description": " Glue ",
                "topic": "\tbackend\n",
            }
        )
        assert blip == NormalizedBlip(
            name="Python",
            quadrant="languages",
            ring="Adopt",
            is_new=True,
            topic="backend",
            description="Glue",
        )

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("true", True),
            ("TRUE", True),
            ("True", True),
            (" true ", True),
            ("false", False),
            ("yes", False),
            ("1", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_new(self, sanitizer, raw, expected):
        assert sanitizer.sanitize({"name": "x", "isNew": raw}).is_new is expected

    def test_missing_columns_become_empty(self, sanitizer):
        blip = sanitizer.sanitize({"name": "Bazel"})
        assert blip.topic == ""
        assert blip.description == ""
        assert blip.is_new is False

    def test_overflow_cells_are_ignored(self, sanitizer):
        blip = sanitizer.sanitize({"name": "x", None: ["extra", "cells"]})
        assert blip.name == "x"

    def test_non_string_values(self, sanitizer):
        assert sanitizer.sanitize({"name": 42, "isNew": True}) == NormalizedBlip("42", "", "", True, "", "")


class TestSanitizeForProtectedSheet:
    def test_pairs_by_index(self, sanitizer):
        row = ["Kotlin", "Trial", "languages", "false", "JVM", "mobile"]
        blip = sanitizer.sanitize_for_protected_sheet(row, HEADER)
        assert blip.name == "Kotlin"
        assert blip.topic == "mobile"

    def test_matches_label_keyed_form(self, sanitizer):
        row = [" Kotlin ", "Trial", "Languages", "TRUE", " JVM ", ""]
        assert sanitizer.sanitize_for_protected_sheet(row, HEADER) == sanitizer.sanitize(dict(zip(HEADER, row)))

    def test_short_row(self, sanitizer):
        blip = sanitizer.sanitize_for_protected_sheet(["Bazel", "Assess", "tools"], HEADER)
        assert blip.ring == "Assess"
        assert blip.description == ""
        assert blip.is_new is False

    def test_header_order_is_respected(self, sanitizer):
        header = ["ring", "name", "quadrant", "isNew", "description"]
        blip = sanitizer.sanitize_for_protected_sheet(["Hold", "COBOL", "languages", "", ""], header)
        assert blip.name == "COBOL"
        assert blip.ring == "Hold"
