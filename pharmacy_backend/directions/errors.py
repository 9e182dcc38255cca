from __future__ import annotations


class InvalidShortTokenError(ValueError):
    """The token is not something ``encode`` could have produced."""


class RecommendationNotFoundError(LookupError):
    """The token decoded fine but no recommendation carries that id."""

    def __init__(self, recommendation_id: int) -> None:
        super().__init__(f"recommendation {recommendation_id} does not exist")
        self.recommendation_id = recommendation_id
