"""
Financial health score from the five quiz answers (income, expenses, debt, savings, goal).
Pure and deterministic; max score 100 (25 savings rate + 30 emergency fund + 25 debt + 20 cash flow).
"""
from typing import Callable, Mapping

from moneyflow.models.types import Goal, HealthLevel, Recommendation, Strength
from moneyflow.schemas.quiz import AnswerValue, ScoreResult

# Emergency fund target = this many months of expenses
EMERGENCY_FUND_MONTHS = 3

# (min score, level), checked top-down
HEALTH_THRESHOLDS: tuple[tuple[int, HealthLevel], ...] = (
    (80, HealthLevel.BEST),
    (60, HealthLevel.GOOD),
    (40, HealthLevel.NEEDS_IMPROVEMENT),
)

# Goal -> (applies(savings_rate, savings, debt, emergency_target), recommendation). Every Goal must be listed.
GOAL_RECOMMENDATIONS: dict[Goal, tuple[Callable[[float, float, float, float], bool], Recommendation]] = {
    Goal.EMERGENCY: (lambda rate, savings, debt, target: savings < target, Recommendation.FOCUS_EMERGENCY),
    Goal.DEBT: (lambda rate, savings, debt, target: debt > 0, Recommendation.FOCUS_DEBT),
    Goal.SAVE: (lambda rate, savings, debt, target: rate < 20, Recommendation.FOCUS_SAVING),
    Goal.INVEST: (lambda rate, savings, debt, target: savings < target, Recommendation.EMERGENCY_BEFORE_INVEST),
}


def _amount(answers: Mapping[str, AnswerValue], key: str) -> float:
    value = answers.get(key) or 0
    if isinstance(value, Goal):
        return 0.0
    return float(value)


def _goal(answers: Mapping[str, AnswerValue]) -> Goal:
    value = answers.get("q5") or Goal.SAVE
    try:
        return Goal(value)
    except ValueError:
        return Goal.SAVE


def health_level(score: int) -> HealthLevel:
    for minimum, level in HEALTH_THRESHOLDS:
        if score >= minimum:
            return level
    return HealthLevel.NEEDS_DEVELOPMENT


def score_answers(answers: Mapping[str, AnswerValue]) -> ScoreResult:
    """Score answers keyed q1..q5. Missing numeric answers count as 0, a missing goal as save."""
    income = _amount(answers, "q1")
    expenses = _amount(answers, "q2")
    debt = _amount(answers, "q3")
    savings = _amount(answers, "q4")
    goal = _goal(answers)

    savings_rate = (income - expenses) / income * 100 if income > 0 else 0.0
    emergency_target = expenses * EMERGENCY_FUND_MONTHS
    debt_ratio = debt / income * 100 if income > 0 else 0.0

    score = 0
    strengths: list[Strength] = []
    recommendations: list[Recommendation] = []

    if savings_rate >= 20:
        score += 25
        strengths.append(Strength.SAVINGS_RATE)
    elif savings_rate >= 10:
        score += 15
    elif savings_rate > 0:
        score += 10

    if savings >= emergency_target:
        score += 30
        strengths.append(Strength.EMERGENCY_FUND)
    elif savings >= expenses:
        score += 20
    elif savings > 0:
        score += 10

    if debt == 0:
        score += 25
        strengths.append(Strength.DEBT_FREE)
    elif debt_ratio < 30:
        score += 15
    elif debt_ratio < 50:
        score += 10

    if income > expenses:
        score += 20
        strengths.append(Strength.POSITIVE_CASH_FLOW)

    if savings_rate < 10:
        recommendations.append(Recommendation.RAISE_SAVINGS_RATE)
    if savings < emergency_target:
        recommendations.append(Recommendation.BUILD_EMERGENCY_FUND)
    if debt > 0:
        recommendations.append(Recommendation.DEBT_PLAN)
    if income <= expenses:
        recommendations.append(Recommendation.IMPROVE_INCOME)

    applies, goal_recommendation = GOAL_RECOMMENDATIONS[goal]
    if applies(savings_rate, savings, debt, emergency_target):
        recommendations.append(goal_recommendation)

    return ScoreResult(
        score=score,
        savings_rate=savings_rate,
        emergency_target=emergency_target,
        debt_ratio=debt_ratio,
        health=health_level(score),
        strengths=tuple(strengths),
        recommendations=tuple(recommendations),
    )
