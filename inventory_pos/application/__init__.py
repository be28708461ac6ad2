"""
Application layer - Use cases and DTOs.

Use cases orchestrate the core services inside a unit of work and are the
only write path for API handlers. DTOs are the API contracts.
"""
