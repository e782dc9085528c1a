"""
Boundary layer.

Adapters for external collaborators: vector providers and LLM services.
"""
