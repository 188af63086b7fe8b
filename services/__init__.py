"""
Storefront services: the API gateway and the user, product and order backends
"""
