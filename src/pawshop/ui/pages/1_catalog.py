import streamlit as st
from pawshop.ui.formatting import format_currency
from pawshop.ui.state import consume_breeds_stale, get_catalog, init_session

st.title("Dog Adoption Center")

init_session()
catalog = get_catalog()

with st.spinner("Loading dogs..."):
    catalog.mount()
    if consume_breeds_stale():
        catalog.refresh_breeds()

state = catalog.state


def _on_breeds_change() -> None:
    catalog.set_breeds(st.session_state["breed_filter"])


def _on_price_change() -> None:
    catalog.set_price_range(st.session_state["min_price"], st.session_state["max_price"])


# --- Filters ---
if "breed_filter" not in st.session_state:
    st.session_state["breed_filter"] = list(state.selected_breeds)

with st.container(border=True):
    st.subheader("Filter Dogs")
    c1, c2, c3 = st.columns([4, 2, 2])
    c1.multiselect(
        "Breed",
        options=state.breeds,
        key="breed_filter",
        placeholder="Select breeds",
        on_change=_on_breeds_change,
    )
    c2.number_input(
        "Min price ($)", min_value=0.0, step=10.0, value=state.min_price,
        key="min_price", on_change=_on_price_change,
    )
    c3.number_input(
        "Max price ($)", min_value=0.0, step=10.0, value=state.max_price,
        key="max_price", on_change=_on_price_change,
    )

if state.error:
    e1, e2 = st.columns([12, 1])
    e1.error(state.error)
    e2.button("✕", key="dismiss_catalog_error", on_click=catalog.dismiss_error)

# --- Listings ---
if not state.dogs:
    st.info("No dogs found on this page.")
else:
    cols = st.columns(4)
    for i, dog in enumerate(state.dogs):
        with cols[i % 4].container(border=True):
            if dog.image:
                st.image(dog.image)
            st.markdown(f"**{dog.name}**")
            st.caption(dog.breed)
            st.write(f":green[{format_currency(dog.price)}]")

# --- Pagination ---
p1, p2, p3 = st.columns([1, 1, 1])
p1.button("Previous", disabled=not catalog.can_prev, on_click=catalog.prev_page)
p2.markdown(f"<div style='text-align:center'>Page {state.page}</div>", unsafe_allow_html=True)
p3.button("Next", disabled=not catalog.can_next, on_click=catalog.next_page)
