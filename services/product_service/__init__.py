"""
Product Service

Serves the product catalogue consumed through the gateway's ``/api/products``.
"""
