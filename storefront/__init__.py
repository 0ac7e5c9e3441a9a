"""Storefront content core: normalization of backend data, plans and challenges."""
