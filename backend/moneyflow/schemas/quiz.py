"""
Quiz definition, per-user session and score result schemas.
"""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from moneyflow.models.types import Goal, HealthLevel, QuizStage, Recommendation, Strength

AnswerValue = int | Goal


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: AnswerValue
    label: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    prompt: str
    options: tuple[Option, ...]

    @field_validator("options")
    @classmethod
    def _at_least_one_option(cls, v: tuple[Option, ...]) -> tuple[Option, ...]:
        if not v:
            raise ValueError("question must have at least one option")
        return v


class QuizDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str
    questions: tuple[Question, ...]

    @property
    def total(self) -> int:
        return len(self.questions)

    def question(self, number: int) -> Question | None:
        """1-based lookup; None past the last question."""
        if 1 <= number <= len(self.questions):
            return self.questions[number - 1]
        return None


class QuizSession(BaseModel):
    """Progress of one user through the quiz. Mutated only by QuizSessionStore."""

    user_id: int
    current_question: int = 1
    stage: QuizStage = QuizStage.AWAITING_READY
    answers: dict[str, AnswerValue] = Field(default_factory=dict)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    savings_rate: float
    emergency_target: float
    debt_ratio: float
    health: HealthLevel
    strengths: tuple[Strength, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()
