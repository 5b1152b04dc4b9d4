"""
Authentication module for the clinic system.

This module provides authentication and authorization functionality including:
- Clinic signup with an owner account
- Email and password login
- Staff invitations with single-use, expiring tokens
- JWT session tokens
- Role-gated route access
"""
