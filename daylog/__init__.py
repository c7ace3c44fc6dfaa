"""Daily activity log services: an action log, authentication and an API gateway."""

__version__ = "0.1.0"