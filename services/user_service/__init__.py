"""
User Service

Serves the user directory consumed through the gateway's ``/api/users``.
"""
