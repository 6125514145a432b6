"""
Client-side reconciliation core
"""
