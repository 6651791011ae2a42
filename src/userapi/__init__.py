"""
User management backend: REST API over a PostgreSQL users table
"""

__version__ = "1.0.0"
