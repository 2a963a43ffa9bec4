"""
Generate repository and repository contract modules for SQLAlchemy models.
"""

__version__ = "1.0.0"
