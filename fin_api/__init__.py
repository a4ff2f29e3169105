"""Layered CRUD backend for a personal-finance application."""
