"""pawshop: dog-adoption storefront and admin UI."""

__version__ = "0.1.0"
