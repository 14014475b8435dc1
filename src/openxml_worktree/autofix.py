"""Application of fix actions to a work tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Callable

from openxml_worktree.fixes import (
    DeleteFiles,
    FixAction,
    InsertClosingTag,
    RemoveXmlFragment,
    insert_closing_tag,
    read_part_text,
    remove_fragment,
    write_part_text,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from openxml_worktree.errors import Finding

logger = logging.getLogger(__name__)


@dataclass
class FixSummary:
    """Outcome of one fix pass."""

    outcomes: list[tuple[Finding, bool]] = field(default_factory=list)

    @property
    def fixed(self) -> int:
        return sum(1 for _, ok in self.outcomes if ok)

    @property
    def failed(self) -> int:
        return sum(1 for _, ok in self.outcomes if not ok)

    def merge(self, other: FixSummary) -> None:
        self.outcomes.extend(other.outcomes)


class AutoFixEngine:
    """Interprets fix actions against the files of one work tree.

    Fixes are applied one after another. The engine never re-validates:
    callers must run the checkers again before trusting the tree.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._handlers: dict[type, Callable[..., bool]] = {
            RemoveXmlFragment: self._remove_fragment,
            DeleteFiles: self._delete_files,
            InsertClosingTag: self._insert_closing_tag,
        }

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, relative: str) -> Path:
        return self._root.joinpath(*PurePosixPath(relative).parts)

    def apply(self, action: FixAction) -> bool:
        """Apply a single fix action.

        Returns:
            True if the tree was changed as the action describes.

        Raises:
            TypeError: For an object that is not a known fix action.
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unknown fix action: {action!r}")
        return handler(action)

    def apply_all(self, findings: Iterable[Finding]) -> FixSummary:
        """Apply the fix of every fixable finding, in order.

        A fix that raises counts as not fixed; the remaining fixes still run.
        """
        summary = FixSummary()
        for finding in findings:
            if finding.fix is None:
                continue
            try:
                ok = self.apply(finding.fix)
            except Exception as exc:
                logger.warning("Error fixing %s: %s", finding, exc)
                ok = False
            else:
                if ok:
                    logger.info("Fixed: %s", finding)
                else:
                    logger.warning("Could not fix: %s", finding)
            summary.outcomes.append((finding, ok))
        return summary

    def _rewrite(self, relative: str, edit: Callable[[str], str]) -> bool:
        path = self._path(relative)
        content = read_part_text(path)
        updated = edit(content)
        if updated == content:
            return False
        write_part_text(path, updated)
        return True

    def _remove_fragment(self, action: RemoveXmlFragment) -> bool:
        return self._rewrite(action.file, lambda text: remove_fragment(text, action.fragment))

    def _insert_closing_tag(self, action: InsertClosingTag) -> bool:
        return self._rewrite(
            action.file,
            lambda text: insert_closing_tag(text, action.element, action.line),
        )

    def _delete_files(self, action: DeleteFiles) -> bool:
        primary = self._path(action.primary)
        if not primary.is_file():
            return False
        try:
            primary.unlink()
        except OSError as exc:
            logger.warning("Could not delete %s: %s", action.primary, exc)
            return False

        for sidecar in action.paths[1:]:
            path = self._path(sidecar)
            try:
                if path.is_file():
                    path.unlink()
            except OSError as exc:
                logger.warning("Could not delete %s: %s", sidecar, exc)
        return True
