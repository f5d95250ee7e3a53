"""
CMA Engine - Source Root

Holds the cma package: listing models, search, comparable market
statistics, price timelines and seller updates.
"""
