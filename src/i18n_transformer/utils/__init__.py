"""Utility functions for the i18n transformer."""

from .validation import ValidationUtils

__all__ = ["ValidationUtils"]
