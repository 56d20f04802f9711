"""Base schema definitions."""

from sqlalchemy import MetaData

metadata = MetaData()
