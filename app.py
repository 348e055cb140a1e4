import streamlit as st
from dotenv import load_dotenv

from core.config import load_config
from core.logging_setup import setup_logger
from core.orchestrator import check_form, load_saved_poems, save_poem
from core.prompt_loader import assign_prompt, load_catalog
from core.share import ShareLinkError, encode_share_link, poem_from_params
from core.storage import get_storage
from verse.forms import has_strict_rules

# -------------------------------------------------------------------
# Setup
# -------------------------------------------------------------------

load_dotenv()

st.set_page_config(page_title="Liz-spiration Navigation", page_icon="🖋️", layout="centered")
st.title("Liz-spiration Navigation")
st.caption("Your pocket poetry prompt generator and creative space")

# -------------------------------------------------------------------
# Config
# -------------------------------------------------------------------

try:
    cfg = load_config()
    catalog = load_catalog(cfg.prompts_path)
except Exception as e:
    st.error(str(e))
    st.stop()

logger = setup_logger(level=cfg.log_level)

storage = get_storage(cfg)
try:
    storage.init()
except Exception as e:
    st.error(f"Storage init failed: {e}")
    st.stop()

# -------------------------------------------------------------------
# Session state defaults
# -------------------------------------------------------------------

defaults = {
    "poem_prompt": "",
    "poem_style": "",
    "poem_text": "",
    "feedback": "",
    "feedback_ok": False,
    "show_editor": False,
    "share_link": "",
}

for k, v in defaults.items():
    st.session_state.setdefault(k, v)

if "saved_poems" not in st.session_state:
    st.session_state["saved_poems"] = load_saved_poems(storage)

# -------------------------------------------------------------------
# Shared poem import
# -------------------------------------------------------------------

if "text" in st.query_params and not st.session_state.get("shared_checked"):
    st.session_state["shared_checked"] = True
    try:
        shared = poem_from_params(st.query_params)
    except ShareLinkError as e:
        logger.warning(f"share_link_rejected err={e}")
        st.warning(f"Could not open the shared poem: {e}")
    else:
        st.session_state["poem_text"] = shared.text
        st.session_state["poem_style"] = shared.style
        st.session_state["poem_prompt"] = shared.prompt
        st.session_state["show_editor"] = True
        st.info(f"Opened a shared {shared.style} (doom {shared.doom}).")

# -------------------------------------------------------------------
# Callbacks
# -------------------------------------------------------------------


def _set_feedback(message: str, ok: bool) -> None:
    st.session_state["feedback"] = message
    st.session_state["feedback_ok"] = ok


def on_new_prompt() -> None:
    pick = assign_prompt(catalog)
    st.session_state["poem_prompt"] = pick.prompt
    st.session_state["poem_style"] = pick.style
    st.session_state["show_editor"] = True
    _set_feedback("", False)


def on_save() -> None:
    out = save_poem(
        storage,
        st.session_state["saved_poems"],
        text=st.session_state["poem_text"],
        style=st.session_state["poem_style"],
        prompt=st.session_state["poem_prompt"],
    )
    st.session_state["saved_poems"] = out.poems
    if out.ok:
        st.session_state["poem_text"] = ""
    _set_feedback(out.message, out.ok)


def on_cancel() -> None:
    st.session_state["show_editor"] = False
    st.session_state["poem_text"] = ""
    _set_feedback("", False)


def on_validate() -> None:
    result = check_form(st.session_state["poem_style"], st.session_state["poem_text"])
    _set_feedback(result.message, result.valid)


def on_open(index: int) -> None:
    poem = st.session_state["saved_poems"][index]
    st.session_state["poem_text"] = poem.text
    st.session_state["poem_style"] = poem.style
    st.session_state["poem_prompt"] = poem.prompt
    st.session_state["show_editor"] = True
    _set_feedback("", False)


def on_share(index: int) -> None:
    poem = st.session_state["saved_poems"][index]
    st.session_state["share_link"] = encode_share_link(poem, cfg.share_base_url)


# -------------------------------------------------------------------
# Prompt & editor
# -------------------------------------------------------------------

st.button("Get a Poetry Prompt", on_click=on_new_prompt, type="primary")

if st.session_state["show_editor"]:
    with st.container(border=True):
        st.markdown("**Prompt:**")
        st.markdown(f"*{st.session_state['poem_prompt']}*")
        st.markdown(f"**Style:** *{st.session_state['poem_style']}*")

        st.text_area(
            "Poem",
            key="poem_text",
            height=220,
            placeholder="Start writing your poem here...",
            on_change=_set_feedback,
            args=("", False),
        )

        if st.session_state["feedback"]:
            if st.session_state["feedback_ok"]:
                st.success(st.session_state["feedback"])
            else:
                st.error(st.session_state["feedback"])

        c1, c2, c3 = st.columns(3)
        with c1:
            st.button("Save Poem", on_click=on_save)
        with c2:
            st.button("Cancel", on_click=on_cancel)
        with c3:
            if has_strict_rules(st.session_state["poem_style"]) and st.session_state["poem_text"].strip():
                st.button("Validate Style", on_click=on_validate)

# -------------------------------------------------------------------
# Saved poems
# -------------------------------------------------------------------

st.divider()
st.subheader("Liz's Poems")

saved = st.session_state["saved_poems"]
if not saved:
    st.caption("No poems saved yet. Start writing!")

for i, poem in enumerate(saved):
    with st.container(border=True):
        first_line = poem.text.split("\n")[0].strip() or "Untitled"
        st.markdown(f"**{first_line}**")
        st.caption(f"{poem.style} · Doom: {poem.doom} · {poem.date.strftime('%Y-%m-%d')}")
        st.progress(poem.doom / 100)

        b1, b2 = st.columns(2)
        with b1:
            st.button("Open", key=f"open_{i}", on_click=on_open, args=(i,))
        with b2:
            st.button("Share", key=f"share_{i}", on_click=on_share, args=(i,))

if st.session_state["share_link"]:
    st.markdown("### Share link")
    st.code(st.session_state["share_link"])
