"""Apply corrected edits to file content."""

from __future__ import annotations

from editmend.core.agents.edit_fixer.models import SearchReplaceEdit


class EditApplyError(Exception):
    """Raised when a corrected edit cannot be applied to the content."""

    pass


def apply_edit(content: str, edit: SearchReplaceEdit) -> str:
    """Apply a corrected search/replace edit.

    Only the first occurrence of ``search`` is replaced.

    Args:
        content: Current file content
        edit: Corrected edit

    Returns:
        New content (unchanged if the edit reports no changes required)

    Raises:
        EditApplyError: If ``search`` is empty or not present in content
    """
    if edit.no_changes_required:
        return content

    if not edit.search:
        raise EditApplyError("Corrected edit has an empty search string")

    if edit.search not in content:
        raise EditApplyError("Corrected search string not found in file content")

    return content.replace(edit.search, edit.replace, 1)
