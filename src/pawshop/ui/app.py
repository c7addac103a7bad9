"""Streamlit entry point: ``streamlit run src/pawshop/ui/app.py``."""
import streamlit as st

from pawshop.logging import configure_logging
from pawshop.ui.state import get_api_url, init_session, set_api_url
from pawshop.ui.validation import run_all_checks

st.set_page_config(page_title="Dog Adoption Center", page_icon="🐶", layout="wide")

configure_logging()
init_session()

st.title("Dog Adoption Center")
st.write("Browse adoptable dogs in the **Catalog**, or manage listings from the **Admin** dashboard.")

# --- Backend selection ---
with st.sidebar:
    st.subheader("Backend")
    url = st.text_input("API base URL", value=get_api_url())
    if url != get_api_url():
        set_api_url(url)
        st.rerun()

# --- Pre-flight ---
if st.button("Check connection"):
    errors = run_all_checks(get_api_url())
    if errors:
        for err in errors:
            st.error(err)
    else:
        st.success(f"Connected to {get_api_url()}")

c1, c2 = st.columns(2)
c1.page_link("pages/1_catalog.py", label="Open Catalog", icon="🐕")
c2.page_link("pages/2_admin.py", label="Open Admin Dashboard", icon="🛠️")
