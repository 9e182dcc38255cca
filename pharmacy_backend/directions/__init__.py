"""
Pharmacy direction engine.

Responsibilities:
- Rank candidate pharmacies by great-circle distance from the user.
- Persist every recommendation so it can be looked up later by id.
- Mint short direction links and resolve them back to map URLs.
"""
