"""Pydantic request/response schemas for the Reviews API."""

from pydantic import BaseModel, Field


class LineRating(BaseModel):
    rating: int
    comment: str | None = Field(None, max_length=2000)


class SubmitOrderReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "ratings": {
                        "prod-mango-pickle": {"rating": 5, "comment": "Just like home."},
                        "prod-lime-pickle": {"rating": 4},
                    }
                }
            ]
        }
    }

    ratings: dict[str, LineRating]


class ReviewIdsResponse(BaseModel):
    review_ids: list[str]
