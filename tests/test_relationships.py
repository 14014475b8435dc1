"""Tests for relationship parsing and target resolution."""

from __future__ import annotations

from openxml_worktree.relationships import (
    Relationship,
    iter_relationships,
    normalize_part_path,
    owner_directory,
)
from tests.fixture_loader import load_fixture_text

SLIDE_RELS = "ppt/slides/_rels/slide1.xml.rels"


def _rel(target: str, source: str = SLIDE_RELS, target_mode: str = "Internal") -> Relationship:
    return Relationship(
        id="rId1",
        type="http://example.com/type",
        target=target,
        source=source,
        fragment=f'<Relationship Id="rId1" Target="{target}"/>',
        target_mode=target_mode,
    )


class TestRelationship:
    """Tests for the Relationship dataclass."""

    def test_is_external_by_scheme(self) -> None:
        """Test that http(s) targets are external even without TargetMode."""
        assert _rel("http://example.com/a").is_external
        assert _rel("https://example.com/a").is_external

    def test_is_external_by_target_mode(self) -> None:
        """Test that TargetMode="External" marks any target as external."""
        assert _rel("mailto:team@example.com", target_mode="External").is_external

    def test_is_internal(self) -> None:
        """Test internal relationship detection."""
        assert not _rel("../slideLayouts/slideLayout1.xml").is_external

    def test_resolve_target_with_parent(self) -> None:
        """Test resolving a target that climbs out of the owner directory."""
        assert _rel("../slideLayouts/slideLayout1.xml").resolve_target() == (
            "ppt/slideLayouts/slideLayout1.xml"
        )

    def test_resolve_target_relative(self) -> None:
        """Test resolving against the parent of the _rels directory."""
        rel = _rel("slides/slide1.xml", source="ppt/_rels/presentation.xml.rels")
        assert rel.resolve_target() == "ppt/slides/slide1.xml"

    def test_resolve_target_package_rels(self) -> None:
        """Test that package relationships resolve against the root."""
        rel = _rel("ppt/presentation.xml", source="_rels/.rels")
        assert rel.resolve_target() == "ppt/presentation.xml"

    def test_resolve_target_absolute(self) -> None:
        """Test that absolute targets resolve against the root."""
        assert _rel("/ppt/media/image1.png").resolve_target() == "ppt/media/image1.png"

    def test_resolve_target_percent_encoded(self) -> None:
        """Test that percent-encoded targets are decoded."""
        assert _rel("../media/image%201.png").resolve_target() == "ppt/media/image 1.png"

    def test_resolve_target_escaping_root(self) -> None:
        """Test that targets above the package root do not resolve."""
        assert _rel("../../../outside.xml").resolve_target() is None

    def test_resolve_external_target(self) -> None:
        """Test that external targets never resolve to a part."""
        assert _rel("https://example.com/a").resolve_target() is None


class TestIterRelationships:
    """Tests for reading relationship entries from text."""

    def test_reads_all_entries_in_order(self) -> None:
        """Test parsing every relationship in document order."""
        rels = list(iter_relationships(load_fixture_text("relationships", "mixed.rels"), SLIDE_RELS))

        assert [r.id for r in rels] == ["rId1", "rId2", "rId3", "rId4"]

    def test_reads_attributes(self) -> None:
        """Test that id, type, target and mode are read."""
        rels = list(iter_relationships(load_fixture_text("relationships", "mixed.rels"), SLIDE_RELS))

        assert rels[0].type.endswith("/slideLayout")
        assert rels[0].target == "../slideLayouts/slideLayout1.xml"
        assert rels[0].target_mode == "Internal"
        assert rels[1].target_mode == "External"
        assert all(r.source == SLIDE_RELS for r in rels)

    def test_fragment_is_exact_source_text(self) -> None:
        """Test that each fragment can be found verbatim in the source."""
        text = load_fixture_text("relationships", "mixed.rels")

        for rel in iter_relationships(text, SLIDE_RELS):
            assert rel.fragment in text
            assert rel.fragment.startswith("<Relationship ")

    def test_single_quotes_and_end_tag(self) -> None:
        """Test entries written with single quotes and an explicit end tag."""
        rels = list(iter_relationships(load_fixture_text("relationships", "mixed.rels"), SLIDE_RELS))

        assert rels[3].target == "../media/image%201.png"
        assert rels[3].fragment.endswith("</Relationship>")

    def test_escaped_attribute_values(self) -> None:
        """Test that XML entities in attribute values are decoded."""
        text = '<Relationships><Relationship Id="rId1" Type="t" Target="a&amp;b.xml"/></Relationships>'

        (rel,) = iter_relationships(text, "_rels/.rels")
        assert rel.target == "a&b.xml"

    def test_greater_than_in_attribute_value(self) -> None:
        """Test that a literal ">" inside a quoted value does not end the entry."""
        entry = '<Relationship Id="rId1" Type="t" Target="a>b.xml"/>'
        text = f"<Relationships>{entry}<Relationship Id='rId2' Type='t' Target='c.xml'/></Relationships>"

        rels = list(iter_relationships(text, "_rels/.rels"))

        assert [r.target for r in rels] == ["a>b.xml", "c.xml"]
        assert rels[0].fragment == entry

    def test_empty_relationships(self) -> None:
        """Test parsing a part without entries."""
        text = '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships"/>'
        assert list(iter_relationships(text, "_rels/.rels")) == []


class TestPathHelpers:
    """Tests for path helpers."""

    def test_owner_directory(self) -> None:
        assert owner_directory("ppt/slides/_rels/slide1.xml.rels") == "ppt/slides"
        assert owner_directory("ppt/_rels/presentation.xml.rels") == "ppt"
        assert owner_directory("_rels/.rels") == ""

    def test_normalize_part_path(self) -> None:
        assert normalize_part_path("ppt/slides/../media/./a.png") == "ppt/media/a.png"
        assert normalize_part_path("/ppt/presentation.xml") == "ppt/presentation.xml"
        assert normalize_part_path("../a.xml") is None
