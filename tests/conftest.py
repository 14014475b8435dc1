"""pytest configuration and fixtures for openxml_worktree tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from openxml_worktree import PackageScanner, ScannedTree, WorkTreeValidator
from tests.fixture_loader import copy_worktree, load_fixture_text


@pytest.fixture
def validator() -> WorkTreeValidator:
    """Provide a WorkTreeValidator instance."""
    return WorkTreeValidator()


@pytest.fixture
def worktree(tmp_path: Path) -> Path:
    """Create a minimal valid PPTX work tree."""
    return copy_worktree("minimal", tmp_path / "work")


@pytest.fixture
def scan(worktree: Path):
    """Scan the work tree again after the test changed it."""

    def _scan() -> ScannedTree:
        return PackageScanner().scan(worktree)

    return _scan


@pytest.fixture
def unclosed_slide(worktree: Path) -> Path:
    """Work tree whose first slide has an <a:t> left unclosed before a run."""
    slide = worktree / "ppt" / "slides" / "slide1.xml"
    slide.write_text(load_fixture_text("corrupt", "unclosed_text_run.xml"), encoding="utf-8")
    return worktree


@pytest.fixture
def broken_relationship(worktree: Path) -> Path:
    """Work tree where slide2's layout relationship points at a missing part."""
    rels = worktree / "ppt" / "slides" / "_rels" / "slide2.xml.rels"
    text = rels.read_text(encoding="utf-8")
    rels.write_text(
        text.replace("../slideLayouts/slideLayout1.xml", "../slideLayouts/slideLayout9.xml"),
        encoding="utf-8",
    )
    return worktree


@pytest.fixture
def orphan_slide(worktree: Path) -> Path:
    """Work tree with a third slide the presentation never references."""
    slides = worktree / "ppt" / "slides"
    (slides / "slide3.xml").write_bytes((slides / "slide1.xml").read_bytes())
    (slides / "_rels" / "slide3.xml.rels").write_bytes(
        (slides / "_rels" / "slide1.xml.rels").read_bytes()
    )
    return worktree


@pytest.fixture
def stray_override(worktree: Path) -> Path:
    """Work tree whose content types declare a part that is not there."""
    registry = worktree / "[Content_Types].xml"
    text = registry.read_text(encoding="utf-8")
    registry.write_text(
        text.replace(
            "</Types>",
            '  <Override PartName="/ppt/slides/slide7.xml" '
            'ContentType="application/vnd.openxmlformats-officedocument.presentationml.slide+xml"/>\n'
            "</Types>",
        ),
        encoding="utf-8",
    )
    return worktree
