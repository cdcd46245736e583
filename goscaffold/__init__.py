"""goscaffold -- configuration-driven Go web-service project generator."""

__version__ = "0.1.0"
