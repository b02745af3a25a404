"""
Bookstore services.

Three small REST services sharing one code base:
- catalog: books
- accounts: users and credential checks
- orders: orders validated against the other two
"""

__version__ = "1.0.0"
