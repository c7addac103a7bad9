"""Pre-flight validation for the Streamlit UI and the ``doctor`` command."""
from typing import List, Optional
from urllib.parse import urlparse

from pawshop.config import settings


def validate_settings() -> List[str]:
    """Validate static configuration."""
    errors = []
    parsed = urlparse(settings.API_BASE_URL)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        errors.append(f"PAWSHOP_API_BASE_URL is not an http(s) URL: {settings.API_BASE_URL!r}")
    return errors


def validate_backend_connection(base_url: Optional[str] = None) -> List[str]:
    """Validate that the catalog service is reachable."""
    errors = []
    try:
        from pawshop.ui.api_client import PawshopClient
        with PawshopClient(base_url=base_url) as client:
            client.health()
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
    return errors


def run_all_checks(base_url: Optional[str] = None) -> List[str]:
    """Run all validation checks."""
    errors = []
    errors.extend(validate_settings())
    errors.extend(validate_backend_connection(base_url))
    return errors
