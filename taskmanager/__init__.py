"""
Task Manager - Backend Service

User accounts with access/refresh token authentication, plus
ownership-scoped lists and tasks.
"""

__version__ = "0.1.0"
