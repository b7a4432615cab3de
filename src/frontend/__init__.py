"""HTTP front end (Flask) for the term search engine."""
from .web import create_app, main

__all__ = ["create_app", "main"]
