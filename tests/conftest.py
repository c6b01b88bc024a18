from __future__ import annotations

import pytest

from prompt_form import PromptForm


class FakeGenerator:
    """Stands in for GeminiClient; replays one outcome per call."""

    def __init__(self, outcome: str | Exception = "Hi there!") -> None:
        self.outcome = outcome
        self.prompts: list[str] = []
        self.form: PromptForm | None = None
        self.loading_seen: list[bool] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.form is not None:
            self.loading_seen.append(self.form.is_loading)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def form(generator: FakeGenerator) -> PromptForm:
    prompt_form = PromptForm(generator)
    generator.form = prompt_form
    return prompt_form
