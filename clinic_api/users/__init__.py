"""
Users module: clinic staff accounts.
"""
