"""Standings file loading."""

from .loader import load_standings

__all__ = ["load_standings"]
