"""
Clinics module: the tenant root record.
"""
