"""
Order Service

Holds orders in process memory; the collection starts empty.
"""
