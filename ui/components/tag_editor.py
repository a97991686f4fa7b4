from typing import List

import streamlit as st

from utils.tags import add_tag, remove_tag


def tag_editor(key: str, initial: List[str]) -> List[str]:
    """Editable tag list kept in session state under ``key``.

    Lives outside st.form because forms cannot hold per-tag buttons.
    """
    state_key = f"{key}_tags"
    if state_key not in st.session_state:
        st.session_state[state_key] = list(initial)
    tags: List[str] = st.session_state[state_key]

    st.markdown("**Tags**")
    c1, c2 = st.columns([4, 1])
    new_tag = c1.text_input("Add tag", key=f"{key}_new_tag", label_visibility="collapsed",
                            placeholder="Add a tag…")
    if c2.button("Add", key=f"{key}_add_tag", disabled=not (new_tag or '').strip()):
        st.session_state[state_key] = add_tag(tags, new_tag)
        st.rerun()

    if tags:
        cols = st.columns(min(len(tags), 6))
        for i, tag in enumerate(tags):
            if cols[i % len(cols)].button(f"{tag} ✕", key=f"{key}_rm_{i}"):
                st.session_state[state_key] = remove_tag(tags, tag)
                st.rerun()
    return list(st.session_state[state_key])


def reset_tag_editor(key: str):
    st.session_state.pop(f"{key}_tags", None)
    st.session_state.pop(f"{key}_new_tag", None)
