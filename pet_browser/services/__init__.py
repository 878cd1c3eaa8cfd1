"""
Service layer: the catalog HTTP client and per-tab browser sessions.
"""
