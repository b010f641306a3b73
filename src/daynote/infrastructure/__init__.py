"""Infrastructure layer — vault registry, note files, selection state, cache.

This layer depends on stdlib and third-party libs (pydantic, watchdog).
It may import from domain, but never from services, commands, or output.
"""
