"""
Offline helpers for working with NEO 2 addresses.
"""
