"""
CMA Engine - Core Package

Comparative market analysis engine: property search, comparable statistics,
price timelines and seller-update matching.
"""

__version__ = "0.1.0"
