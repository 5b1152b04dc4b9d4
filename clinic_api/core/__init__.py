"""
Shared building blocks: security helpers, middleware and startup bootstrap.
"""
