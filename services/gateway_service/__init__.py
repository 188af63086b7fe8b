"""
API Gateway Service

Single entry point that forwards ``/api/<resource>`` requests to the backend
that owns the resource and relays the answer.
"""
