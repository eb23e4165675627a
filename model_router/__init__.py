"""
Model Router: picks the upstream endpoint each language model requires.
"""

__version__ = "1.0.0"
