"""
Ali Farm - investor contracts backend
"""
__version__ = "1.0.0"
