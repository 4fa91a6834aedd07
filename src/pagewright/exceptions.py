"""Core exceptions for pagewright."""


class PagewrightError(Exception):
    """Base exception for all pagewright errors."""
