import logging
from dataclasses import replace

import streamlit as st

from core.view_model import derive_view
from frontend import table_view as tv

logging.basicConfig(level=logging.INFO)

# ---------- UI setup ----------
st.set_page_config(page_title="CSV Data Table", layout="wide")
tv.inject_base_styles()
st.markdown("<div class='table-title'>CSV Data Table</div>", unsafe_allow_html=True)

top = st.columns([6, 1])
refresh = top[1].button("Refresh")
all_records = tv.load_records(force=refresh)

error = st.session_state.get(tv.ERROR_KEY)
if error:
    st.error(f"Error fetching CSV: {error}")

state = tv.apply_viewport(tv.browser_width())
tv.render_search(state)

view = derive_view(state, all_records)
if view.current_page != state.current_page:
    tv.put_state(replace(state, current_page=view.current_page))

tv.render_header(state)
if view.rows:
    tv.render_rows(view)
elif not error:
    st.info("No rows match the current search.")
tv.render_pagination(view)
tv.render_export(view)
