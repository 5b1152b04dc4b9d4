"""
Clinic management API.

Multi-tenant backend where every record is scoped to a clinic. This package
provides clinic signup, staff authentication and staff invitations; other
feature modules consume the authenticated principal issued here.
"""
