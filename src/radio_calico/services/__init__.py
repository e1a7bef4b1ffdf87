# src/radio_calico/services/__init__.py
"""Business logic services for the Radio Calico application."""

from .rating_store import RatingAggregate, RatingStore

__all__ = [
    "RatingAggregate",
    "RatingStore",
]
