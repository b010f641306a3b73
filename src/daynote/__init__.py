"""daynote — today's daily note from an Obsidian vault, cached for display surfaces."""

__version__ = "0.1.0"
