"""Nutrition facts per 100g for dishes built from nested recipes."""

__version__ = "0.1.0"
