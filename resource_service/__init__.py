"""
Resource service.

REST CRUD service for resource records plus a small price-table based
currency converter.
"""

__version__ = "1.0.0"
