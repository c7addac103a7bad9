"""Session-state helpers for the Streamlit UI.

No HTTP here, only reads/writes ``st.session_state``.
"""
import streamlit as st
from typing import Optional

from pawshop.config import settings
from pawshop.ui.admin import AdminController
from pawshop.ui.api_client import get_client
from pawshop.ui.catalog import CatalogController


def init_session() -> None:
    """Initialize session state variables."""
    if "pawshop_api_url" not in st.session_state:
        st.session_state["pawshop_api_url"] = settings.API_BASE_URL
    if "breeds_stale" not in st.session_state:
        st.session_state["breeds_stale"] = False


def get_api_url() -> str:
    return st.session_state.get("pawshop_api_url", settings.API_BASE_URL)


def set_api_url(url: str) -> None:
    """Point the session at another backend; controllers are rebuilt lazily."""
    url = url.strip().rstrip("/")
    if not url or url == get_api_url():
        return
    st.session_state["pawshop_api_url"] = url
    for key in ("catalog_controller", "admin_controller", "breed_filter"):
        st.session_state.pop(key, None)


def mark_breeds_stale() -> None:
    """Called after an admin mutation: the catalog re-discovers breeds on next render."""
    st.session_state["breeds_stale"] = True


def consume_breeds_stale() -> bool:
    stale = bool(st.session_state.get("breeds_stale"))
    st.session_state["breeds_stale"] = False
    return stale


def get_catalog() -> CatalogController:
    """Get this session's catalog controller."""
    controller: Optional[CatalogController] = st.session_state.get("catalog_controller")
    if controller is None:
        controller = CatalogController(get_client(), page_size=settings.PAGE_SIZE)
        st.session_state["catalog_controller"] = controller
    return controller


def get_admin() -> AdminController:
    """Get this session's admin controller."""
    controller: Optional[AdminController] = st.session_state.get("admin_controller")
    if controller is None:
        controller = AdminController(get_client(), on_mutation=mark_breeds_stale)
        st.session_state["admin_controller"] = controller
    return controller
