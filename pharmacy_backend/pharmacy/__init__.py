"""
Pharmacy catalogue.

Responsibilities:
- Hold the authoritative pharmacy records (primary store).
- Keep a disposable JSON snapshot of every pharmacy in a key/value cache.
- Serve the candidate set for ranking, cache first, primary store second.
"""
