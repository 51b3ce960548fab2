"""Nusafiber Selecta registration API."""

__version__ = "1.0.0"
