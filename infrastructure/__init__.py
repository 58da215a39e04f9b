"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - storage: File storage abstraction (S3, local filesystem)
    - repositories: Persistence interfaces and the Django ORM adapter
    - container: Service container wiring adapters into services

This package enables:
    - Easy testing with mock implementations
    - Switching between providers without code changes
    - Loose coupling between business logic and infrastructure
"""
