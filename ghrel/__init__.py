"""ghrel - tag and publish GitHub releases for a build artifact."""

__version__ = "0.1.0"
