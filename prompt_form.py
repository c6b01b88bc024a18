import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Protocol

from gemini_client import GenerationError

logger = logging.getLogger(__name__)

SUBMIT_KEY = "Enter"
UNEXPECTED_FAILURE_MESSAGE = "Something went wrong."


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class FormState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class PromptForm:
    """
    State holder for the prompt form.

    Owns the prompt text, the loading flag, the error string and the result
    string. The view reads these after each interaction and never writes them
    directly. Only ``submit`` talks to the generator.
    """

    def __init__(self, generator: TextGenerator):
        self.generator = generator
        self.prompt_text = ""
        self.is_loading = False
        self.error_message = ""
        self.result_text = ""

    @property
    def can_submit(self) -> bool:
        return not self.is_loading and self.prompt_text.strip() != ""

    @property
    def state(self) -> FormState:
        if self.is_loading:
            return FormState.LOADING
        if self.error_message:
            return FormState.FAILURE
        if self.result_text:
            return FormState.SUCCESS
        return FormState.IDLE

    def update_prompt(self, text: str) -> None:
        self.prompt_text = text

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self.is_loading = True
        try:
            yield
        finally:
            self.is_loading = False

    def submit(self) -> bool:
        """
        Send the current prompt and record the outcome.

        Returns:
            bool: True if a request was issued, False if the call was a no-op
            (blank prompt or a request already in flight).
        """
        if not self.can_submit:
            return False

        with self._loading():
            self.error_message = ""
            self.result_text = ""
            try:
                self.result_text = self.generator.generate(self.prompt_text)
            except GenerationError as e:
                self.error_message = e.user_message
            except Exception as e:
                logger.exception("Unexpected error while generating content")
                self.error_message = str(e) or UNEXPECTED_FAILURE_MESSAGE
        return True

    def handle_key(self, key: str) -> bool:
        if key == SUBMIT_KEY and self.can_submit:
            return self.submit()
        return False

    def dismiss_error(self) -> None:
        if not self.is_loading:
            self.error_message = ""
