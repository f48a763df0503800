"""WSGI REST API for user registration, with models for coffees, recipes and ratings."""

__version__ = "1.0.0"