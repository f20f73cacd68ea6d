"""Command-line front-end for the source{d} docker-compose environment."""

__version__ = "0.1.0"
