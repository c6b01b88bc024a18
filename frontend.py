import datetime
import logging

import streamlit as st

from gemini_client import GeminiClient
from prompt_form import PromptForm
from settings import Settings

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# =============================================================================
# SESSION STATE
# =============================================================================
# One PromptForm per browser session; it is dropped when the session ends.
FORM_KEY = "prompt_form"
PROMPT_KEY = "prompt_input"
# Set when a submission is waiting to be sent on this rerun.
PENDING_KEY = "submit_pending"

APP_NAME = "MelioConcept AI"


def get_form() -> PromptForm:
    """Return this session's form, building it from the environment on first use."""
    if FORM_KEY not in st.session_state:
        settings = Settings.from_env()
        if not settings.api_key:
            logger.warning("GEMINI_API_KEY is not set; requests will likely be rejected")
        st.session_state[FORM_KEY] = PromptForm(GeminiClient(settings))
    return st.session_state[FORM_KEY]


def on_submit() -> None:
    """
    Form callback, fired by the button and by Enter inside the input.

    Only queues the submission so the next render can show the widgets
    disabled while the request is in flight.
    """
    form = get_form()
    form.update_prompt(st.session_state.get(PROMPT_KEY, ""))
    if form.can_submit:
        st.session_state[PENDING_KEY] = True


# =============================================================================
# RENDERING
# =============================================================================
def restore_prompt(form: PromptForm) -> None:
    """Refill the input from the form; toggling `disabled` makes Streamlit drop its value."""
    if st.session_state.get(PROMPT_KEY) != form.prompt_text:
        st.session_state[PROMPT_KEY] = form.prompt_text


def render_prompt_form(busy: bool) -> None:
    with st.form("prompt", clear_on_submit=False, border=False):
        st.text_input(
            "Your prompt for the AI:",
            key=PROMPT_KEY,
            placeholder="E.g. Write a short story about a robot exploring a new planet...",
            disabled=busy,
        )
        st.form_submit_button(
            "Generate text",
            type="primary",
            help="Blank prompts are ignored.",
            on_click=on_submit,
            disabled=busy,
        )


def render_outcome(form: PromptForm) -> None:
    if form.error_message:
        st.error(f"Error: {form.error_message}")
        st.button("Dismiss", on_click=form.dismiss_error)
    elif form.result_text:
        st.subheader("Generated text:")
        st.text(form.result_text)


def render_footer() -> None:
    st.divider()
    st.caption(f"© {datetime.date.today().year} {APP_NAME}. All rights reserved.")


# =============================================================================
# STREAMLIT UI
# =============================================================================
st.set_page_config(page_title=APP_NAME, page_icon="✨")

form = get_form()
pending = st.session_state.pop(PENDING_KEY, False)

st.title(f"✨ {APP_NAME}")
st.write("Generate text with AI")

restore_prompt(form)
render_prompt_form(busy=form.is_loading or pending)

if pending:
    with st.spinner("Generating..."):
        form.submit()
    # Rerun so the widgets come back enabled with the outcome below them.
    st.rerun()

render_outcome(form)
render_footer()
