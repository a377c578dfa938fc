"""Height limits, chunk sections, heightmaps, sky light, ticks, upgrade data and world chunks."""

__version__ = "0.1.0"

__all__ = [
    "chunk",
    "heightmap",
    "light",
    "section",
    "tick",
    "upgrade",
    "view",
    "world_chunk",
]