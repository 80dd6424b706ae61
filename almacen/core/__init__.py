"""Core domain layer: entities, exceptions, interfaces and services."""
