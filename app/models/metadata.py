"""Shared table metadata."""

from sqlalchemy import MetaData

# Single metadata so foreign keys resolve across modules
metadata = MetaData()
