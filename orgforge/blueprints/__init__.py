"""
OrgForge
Blueprint registry.
"""
