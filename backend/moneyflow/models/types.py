"""
Closed value sets shared by the user model, access control and the quiz.
str-valued so they compare equal to the plain strings stored in the DB and sent by Telegram.
"""
from enum import Enum


class Tier(str, Enum):
    FREE = "free"
    ESSENTIAL = "essential"
    PREMIUM = "premium"
    VIP = "vip"


class Goal(str, Enum):
    EMERGENCY = "emergency"
    DEBT = "debt"
    SAVE = "save"
    INVEST = "invest"


class HealthLevel(str, Enum):
    BEST = "best"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    NEEDS_DEVELOPMENT = "needs_development"


class Strength(str, Enum):
    SAVINGS_RATE = "savings_rate"
    EMERGENCY_FUND = "emergency_fund"
    DEBT_FREE = "debt_free"
    POSITIVE_CASH_FLOW = "positive_cash_flow"


class Recommendation(str, Enum):
    RAISE_SAVINGS_RATE = "raise_savings_rate"
    BUILD_EMERGENCY_FUND = "build_emergency_fund"
    DEBT_PLAN = "debt_plan"
    IMPROVE_INCOME = "improve_income"
    # Goal-targeted; at most one per result
    FOCUS_EMERGENCY = "focus_emergency"
    FOCUS_DEBT = "focus_debt"
    FOCUS_SAVING = "focus_saving"
    EMERGENCY_BEFORE_INVEST = "emergency_before_invest"


class QuizStage(str, Enum):
    AWAITING_READY = "awaiting_ready"
    AWAITING_ANSWER = "awaiting_answer"
