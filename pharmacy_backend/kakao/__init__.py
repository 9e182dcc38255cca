"""
Kakao Local API integration layer.

Responsibilities:
- Manage Kakao REST API configuration and credentials.
- Resolve free-form addresses to coordinates (address search).
- Look up pharmacies near a point (category search).
- Retry transient upstream failures and degrade gracefully when they persist.
"""
