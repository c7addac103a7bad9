import streamlit as st
from pawshop.ui.formatting import format_count, format_currency
from pawshop.ui.state import get_admin, init_session

init_session()
admin = get_admin()

h1, h2 = st.columns([6, 1])
h1.title("Dog Admin Dashboard")
if h2.button("Logout"):
    # No session to end yet; back to the public catalog.
    st.switch_page("pages/1_catalog.py")

with st.spinner("Loading..."):
    admin.mount()

state = admin.state

if state.error:
    e1, e2 = st.columns([12, 1])
    e1.error(state.error)
    e2.button("✕", key="dismiss_admin_error", on_click=admin.dismiss_error)

# --- Statistics ---
stats = state.statistics
if stats:
    with st.container(border=True):
        st.subheader("Statistics")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total Dogs", format_count(stats.total_dogs))
        c2.metric("Unique Breeds", format_count(stats.unique_breeds))
        c3.metric("Total Value", format_currency(stats.total_inventory_value))
        c4.metric("Average Price", format_currency(stats.average_price))
        if stats.breed_distribution:
            st.bar_chart({"dogs": stats.breed_distribution})

# --- Add Dog ---
st.button(
    "Cancel" if state.adding else "Add New Dog",
    type="secondary" if state.adding else "primary",
    on_click=admin.toggle_add_form,
)

if state.adding:
    with st.form("add_dog", clear_on_submit=False, border=True):
        st.subheader("Add New Dog")
        f1, f2 = st.columns(2)
        name = f1.text_input("Name")
        image = f2.text_input("Image URL")
        breed = f1.text_input("Breed")
        price = f2.number_input("Price ($)", min_value=0.0, step=0.01, value=0.0, format="%.2f")

        if st.form_submit_button("Save Dog"):
            # Failures surface in the dismissible banner after the rerun.
            admin.create(name, image, breed, price)
            st.rerun()

st.divider()


# --- Listings ---
def _edit_key(field: str, dog_id) -> str:
    return f"edit_{field}_{dog_id}"


def _forget_edit_widgets(dog_id) -> None:
    for field in ("name", "image", "breed", "price"):
        st.session_state.pop(_edit_key(field, dog_id), None)


def _on_draft_change(dog_id, field: str) -> None:
    admin.update_draft(dog_id, **{field: st.session_state[_edit_key(field, dog_id)]})


def _on_save(dog_id) -> None:
    if admin.save_edit(dog_id):
        _forget_edit_widgets(dog_id)


def _on_cancel(dog_id) -> None:
    admin.cancel_edit(dog_id)
    _forget_edit_widgets(dog_id)


widths = [3, 2, 3, 2, 3]
header = st.columns(widths)
for col, label in zip(header, ["Name", "Image", "Breed", "Price", "Actions"]):
    col.markdown(f"**{label}**")

if not state.dogs:
    st.info("No dogs found. Add a dog to get started.")

for dog in state.dogs:
    row = admin.display(dog)
    c1, c2, c3, c4, c5 = st.columns(widths)

    if state.drafts.is_editing(dog.id):
        for col, field in ((c1, "name"), (c2, "image"), (c3, "breed")):
            col.text_input(
                field.title(), value=getattr(row, field), key=_edit_key(field, dog.id),
                label_visibility="collapsed", on_change=_on_draft_change, args=(dog.id, field),
            )
        c4.number_input(
            "Price", value=float(row.price), min_value=0.0, step=0.01, format="%.2f",
            key=_edit_key("price", dog.id), label_visibility="collapsed",
            on_change=_on_draft_change, args=(dog.id, "price"),
        )
        a1, a2 = c5.columns(2)
        a1.button("Save", key=f"save_{dog.id}", type="primary", on_click=_on_save, args=(dog.id,))
        a2.button("Cancel", key=f"cancel_{dog.id}", on_click=_on_cancel, args=(dog.id,))
        continue

    c1.write(row.name)
    if row.image:
        c2.image(row.image, width=80)
    c3.write(row.breed)
    c4.write(format_currency(row.price))

    if state.pending_delete == dog.id:
        c5.warning("Delete this dog?")
        a1, a2 = c5.columns(2)
        a1.button("Yes, delete", key=f"confirm_{dog.id}", type="primary", on_click=admin.confirm_delete)
        a2.button("Keep", key=f"keep_{dog.id}", on_click=admin.cancel_delete)
    else:
        a1, a2 = c5.columns(2)
        a1.button("Edit", key=f"edit_{dog.id}", on_click=admin.begin_edit, args=(dog.id,))
        a2.button("Delete", key=f"delete_{dog.id}", on_click=admin.request_delete, args=(dog.id,))
