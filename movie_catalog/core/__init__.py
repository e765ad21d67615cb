"""Configuration, security, request context and gates."""
