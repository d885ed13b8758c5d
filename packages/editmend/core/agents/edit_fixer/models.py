"""Models for search/replace edit correction."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EditRequest(BaseModel):
    """A failed search/replace edit plus the context needed to repair it.

    Only the content matters: two requests with equal fields are the same
    request.
    """

    instruction: str = Field(description="What the edit was meant to achieve")
    old_string: str = Field(description="Search text of the failed edit")
    new_string: str = Field(description="Replacement text of the failed edit")
    error: str = Field(description="Error reported when the edit failed")
    current_content: str = Field(description="Current content of the target file")

    model_config = ConfigDict(frozen=True, extra="forbid")

    def cache_fields(self) -> tuple[str, str, str, str, str]:
        """Fields in cache-key order.

        The order is fixed; changing it changes every cache key.
        """
        return (
            self.current_content,
            self.old_string,
            self.new_string,
            self.instruction,
            self.error,
        )

    def prompt_variables(self) -> dict[str, str]:
        """Template variables for the user prompt."""
        return {
            "instruction": self.instruction,
            "old_string": self.old_string,
            "new_string": self.new_string,
            "error": self.error,
            "current_content": self.current_content,
        }


class SearchReplaceEdit(BaseModel):
    """Corrected search/replace edit proposed by the model."""

    explanation: str = Field(description="Why the original edit failed and what was changed")
    search: str = Field(description="Exact text to find in the current file content")
    replace: str = Field(description="Text to substitute for the search text")
    no_changes_required: bool = Field(
        default=False,
        alias="noChangesRequired",
        description="True when the file already reflects the intended change",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def response_schema() -> dict[str, Any]:
    """JSON schema for structured model output (aliases as property names).

    Returns:
        Schema with required ``search``, ``replace`` and ``explanation`` and
        optional ``noChangesRequired``
    """
    return SearchReplaceEdit.model_json_schema(by_alias=True)
