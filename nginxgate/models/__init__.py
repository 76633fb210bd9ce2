"""Models module for nginxgate.

- api: Backend payload models (pydantic)
- state: Selection and settings state
- tree: Change tree node types
"""
