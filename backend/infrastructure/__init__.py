"""
Infrastructure layer - persistence, messaging and external services.
"""
