"""
Clarity Bridge core.

Vector retrieval, multi-view specification generation and quality scoring
for the requirements-to-specification pipeline.
"""

__version__ = "0.1.0"
