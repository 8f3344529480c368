"""kmuc-hoster - Docker project scaffolding with a resumable init workflow."""

__version__ = "1.0.0"
