"""Tests for section kinds and shape checks."""

import pytest

from templateshift.migration.sections import (
    FieldShape,
    SectionKind,
    expected_shape,
    find_shape_mismatches,
    has_content,
    section_kind,
    shape_of,
)


class TestSectionKind:
    def test_known_kind(self):
        assert section_kind("gallery") == SectionKind.GALLERY

    def test_unknown_id_is_custom(self):
        assert section_kind("press-mentions") == SectionKind.CUSTOM


class TestShapeOf:
    @pytest.mark.parametrize(
        ("value", "shape"),
        [
            ({}, FieldShape.OBJECT),
            ([], FieldShape.ARRAY),
            ((1, 2), FieldShape.ARRAY),
            ("text", FieldShape.SCALAR),
            (0, FieldShape.SCALAR),
            (False, FieldShape.SCALAR),
            (None, None),
        ],
    )
    def test_shapes(self, value, shape):
        assert shape_of(value) == shape


class TestHasContent:
    def test_absent_and_empty_are_no_content(self):
        assert has_content(None) is False
        assert has_content({}) is False

    def test_bag_with_key_has_content(self):
        assert has_content({"title": ""}) is True


class TestExpectedShape:
    def test_declared_shape_wins_over_defaults(self):
        assert expected_shape("work", "projects", {"projects": "none"}) == FieldShape.ARRAY

    def test_falls_back_to_default_value(self):
        assert expected_shape("about", "links", {"links": {}}) == FieldShape.OBJECT

    def test_unknown_field(self):
        assert expected_shape("about", "links", None) is None


class TestFindShapeMismatches:
    def test_reports_each_mismatched_field(self):
        mismatches = find_shape_mismatches(
            "gallery", {"heading": ["x"], "images": {"a": 1}, "extra": 1}, None
        )

        assert [m.describe() for m in mismatches] == [
            "heading: array vs scalar",
            "images: object vs array",
        ]

    def test_null_values_skipped(self):
        assert find_shape_mismatches("hero", {"title": None}, None) == []

    def test_custom_section_never_checked(self):
        assert find_shape_mismatches("faq", {"items": {}}, {"items": []}) == []
