"""
Bookstore Services Test Suite

Tests are organized into:
- unit/: Unit tests for individual components
- integration/: API tests against in-process service applications
"""
