"""Tests for edit-fixer prompt composition."""

import pytest

from editmend.core.agents._paths import AGENTS_BASE_PATH
from editmend.core.agents.edit_fixer.models import EditRequest
from editmend.core.agents.edit_fixer.prompt import compose_prompt
from editmend.core.agents.prompts import LoadError, PromptPackLoader


@pytest.fixture
def loader():
    """Loader for the packaged prompt packs."""
    return PromptPackLoader(base_path=AGENTS_BASE_PATH)


def test_compose_prompt_inserts_every_field(loader, edit_args):
    """Test each field value appears in the user message."""
    prompt = compose_prompt(EditRequest(**edit_args), loader)

    for value in edit_args.values():
        assert value.strip() in prompt.user
    assert "{{" not in prompt.user
    assert prompt.system
    assert "noChangesRequired" in prompt.system


def test_compose_prompt_messages(loader, edit_args):
    """Test the request carries a single user message."""
    prompt = compose_prompt(EditRequest(**edit_args), loader)

    assert prompt.messages() == [{"role": "user", "content": prompt.user}]


def test_compose_prompt_values_are_verbatim(loader, edit_args):
    """Test placeholder-like text in values is not substituted again."""
    args = {
        **edit_args,
        "instruction": "use {{ current_content }} and {{ error }}",
        "error": "<b>&amp;</b> {% raw %}",
    }

    prompt = compose_prompt(EditRequest(**args), loader)

    assert "use {{ current_content }} and {{ error }}" in prompt.user
    assert "<b>&amp;</b> {% raw %}" in prompt.user
    assert prompt.user.count(edit_args["current_content"].strip()) == 1


def test_compose_prompt_each_value_once(loader):
    """Test each distinct value is inserted exactly once."""
    args = {
        "instruction": "INSTRUCTION-VALUE",
        "old_string": "OLD-VALUE",
        "new_string": "NEW-VALUE",
        "error": "ERROR-VALUE",
        "current_content": "CONTENT-VALUE",
    }

    prompt = compose_prompt(EditRequest(**args), loader)

    for value in args.values():
        assert prompt.user.count(value) == 1


def test_compose_prompt_unknown_pack(loader, edit_args):
    """Test a missing pack raises LoadError."""
    with pytest.raises(LoadError):
        compose_prompt(EditRequest(**edit_args), loader, pack_name="edit_fixer/prompts/missing")
