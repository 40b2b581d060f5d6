"""
Task Manager - Lists Package

Ownership-scoped lists and tasks behind the access-token gate.
"""
