"""
SQLAlchemy models and shared enums.
"""
from moneyflow.models.user import User
from moneyflow.models.types import Goal, HealthLevel, QuizStage, Recommendation, Strength, Tier

__all__ = ["User", "Tier", "Goal", "HealthLevel", "Strength", "Recommendation", "QuizStage"]
