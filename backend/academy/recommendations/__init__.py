"""Next-lesson recommendations: pure engine, signal builders and orchestration."""

from .engine import (
    DEFAULT_WEIGHTS,
    LessonSignal,
    PathStep,
    RecommendationInput,
    RecommendationResult,
    ScoringWeights,
    choose_recommendation,
    mastery_score,
)


__all__ = [
    "DEFAULT_WEIGHTS",
    "LessonSignal",
    "PathStep",
    "RecommendationInput",
    "RecommendationResult",
    "ScoringWeights",
    "choose_recommendation",
    "mastery_score",
]
