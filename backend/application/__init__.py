"""
Application layer - use cases coordinating the domain with the outside.
"""
