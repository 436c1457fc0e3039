from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Business(_CamelModel):
    id: str
    name: str
    category: str


class PotentialFriend(_CamelModel):
    user_id: str = Field(..., alias="userId")
    similarity_score: float = Field(
        ..., alias="similarityScore", ge=0.0, le=1.0,
        description="Similarity score between 0 and 1",
    )
    shared_interests: int = Field(
        ..., alias="sharedInterests", ge=0,
        description="Number of posts both users liked",
    )


class RecommendedBusiness(_CamelModel):
    business: Business
    recommendation_score: float = Field(..., alias="recommendationScore", ge=0.0)
    reason: str


class RecommendationResult(_CamelModel):
    potential_friends: list[PotentialFriend] = Field(
        default_factory=list, alias="potentialFriends",
    )
    recommended_businesses: list[RecommendedBusiness] = Field(
        default_factory=list, alias="recommendedBusinesses",
    )
    algorithm: str | None = None
    total_similar_users: int | None = Field(default=None, alias="totalSimilarUsers")
    message: str | None = None


class RecommendationResponse(RecommendationResult):
    success: bool = True
