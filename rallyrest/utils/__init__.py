"""Ref and query helpers."""

from . import ref
from .query import Query, where

__all__ = ["Query", "where", "ref"]
