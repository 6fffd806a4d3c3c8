"""
Application layer: the domain store, request DTOs and async use cases.
"""
