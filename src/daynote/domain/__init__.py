"""Domain layer — date-pattern translation and value types.

This layer depends only on stdlib, pydantic, and babel.
It must never import from services, infrastructure, commands, or config.
"""
