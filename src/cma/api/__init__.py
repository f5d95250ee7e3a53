"""
FastAPI REST API for the CMA engine

Exposes:
- Property criteria search and quick search
- CMA statistics and price timeline for a comparable set
- Seller-update match previews and on-demand digests
- Health checks
"""
