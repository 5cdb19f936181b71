"""translated-mirror: fetch, rewrite and translate remote pages."""

__version__ = "0.3.0"
