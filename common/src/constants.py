"""
Chunk streaming constants.
This file centralizes the magic numbers used by the manifest and its loaders.
"""

# Chunk Streaming Constants
PRELOAD_MARGIN_CHUNKS = 1  # Base chunks added on every side of the viewport

# Display Constants
SCREEN_WIDTH = 800  # Default screen width in pixels
SCREEN_HEIGHT = 600  # Default screen height in pixels
