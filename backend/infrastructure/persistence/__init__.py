"""
Persistence - Django ORM models and document stores.
"""
