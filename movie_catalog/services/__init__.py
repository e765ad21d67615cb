"""Domain services over the async SQLAlchemy session."""
