"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants and UI option lists
- exceptions: Custom exception hierarchy
- observable: Publish/subscribe value holder used by the interaction layer
"""
