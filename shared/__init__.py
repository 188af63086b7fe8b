"""
Code shared by the storefront gateway and backend services
"""
