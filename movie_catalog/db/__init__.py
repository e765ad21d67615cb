"""Persistence layer: declarative base, engine and sessions."""
