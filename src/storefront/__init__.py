"""Storefront: product catalogue, session shopping cart and checkout."""
