"""
Financial health quiz: a free five-question check-up that ends with a score out of 100.

Flow per user: start -> "READY" -> question 1..5 (answer by option number) -> results.
An option number sent instead of READY is taken as the answer to question 1.
Invalid answers re-prompt and leave the session as it was. After results the session is
deleted and a follow-up message is scheduled independently of it.
"""
import logging

from moneyflow import messages, metrics
from moneyflow.config import settings
from moneyflow.jobs.tasks import FollowUpScheduler
from moneyflow.models.types import Goal, QuizStage
from moneyflow.schemas.quiz import AnswerValue, Option, Question, QuizDefinition, ScoreResult
from moneyflow.services.message_splitter import send_long_message
from moneyflow.services.quiz_scoring import score_answers
from moneyflow.services.quiz_session_store import QuizSessionStore
from moneyflow.transport.base import MessageTransport

logger = logging.getLogger(__name__)

READY_KEYWORD = "READY"
START_KEYWORD = "START QUIZ"
QUIZ_KEYWORD = "QUIZ"


def _options(*pairs: tuple[AnswerValue, str]) -> tuple[Option, ...]:
    return tuple(Option(value=value, label=label) for value, label in pairs)


FINANCIAL_QUIZ = QuizDefinition(
    title=messages.QUIZ_TITLE,
    subtitle=messages.QUIZ_SUBTITLE,
    questions=(
        Question(
            id=1,
            prompt="💰 ចំណូលប្រចាំខែរបស់អ្នកប្រហែលប៉ុន្មាន?",
            options=_options((300, "ក្រោម $300"), (600, "$300-$600"), (1000, "$600-$1000"), (1500, "លើស $1000")),
        ),
        Question(
            id=2,
            prompt="🏠 ចំណាយប្រចាំខែរបស់អ្នកប្រហែលប៉ុន្មាន?",
            options=_options((200, "ក្រោម $200"), (400, "$200-$400"), (700, "$400-$700"), (1000, "លើស $700")),
        ),
        Question(
            id=3,
            prompt="💳 តើអ្នកមានបំណុលអ្វីខ្លះទេ?",
            options=_options(
                (0, "គ្មានបំណុល"),
                (500, "បំណុលតិចៗ (<$500)"),
                (2000, "បំណុលមធ្យម ($500-$2000)"),
                (5000, "បំណុលច្រើន (>$2000)"),
            ),
        ),
        Question(
            id=4,
            prompt="🏦 តើអ្នកមានលុយសន្សំប៉ុន្មាន?",
            options=_options((0, "គ្មានសន្សំ"), (100, "តិចជាង $100"), (500, "$100-$500"), (1000, "លើស $500")),
        ),
        Question(
            id=5,
            prompt="🎯 គោលដៅហិរញ្ញវត្ថុចម្បងរបស់អ្នកជាអ្វី?",
            options=_options(
                (Goal.EMERGENCY, "បង្កើត Emergency Fund"),
                (Goal.DEBT, "ការពារបំណុល"),
                (Goal.SAVE, "សន្សំលុយបន្ថែម"),
                (Goal.INVEST, "ចាប់ផ្តើមវិនិយោគ"),
            ),
        ),
    ),
)


def parse_choice(text: str, option_count: int) -> int | None:
    """1-based option number from user text, or None if not an integer in 1..option_count."""
    try:
        n = int((text or "").strip())
    except ValueError:
        return None
    return n if 1 <= n <= option_count else None


def is_entry_keyword(text: str | None) -> bool:
    upper = (text or "").strip().upper()
    return upper == READY_KEYWORD or upper == START_KEYWORD or QUIZ_KEYWORD in upper


def format_results(result: ScoreResult) -> str:
    emoji, label = messages.HEALTH_LABELS[result.health]
    strengths = ""
    if result.strengths:
        strengths = messages.QUIZ_STRENGTHS_BLOCK.format(
            lines="\n".join(messages.STRENGTH_LABELS[s] for s in result.strengths)
        )
    if result.recommendations:
        recommendations = "\n".join(
            messages.RECOMMENDATION_LABELS[r].format(target=f"{result.emergency_target:.0f}")
            for r in result.recommendations
        )
    else:
        recommendations = messages.QUIZ_NO_RECOMMENDATIONS
    return messages.QUIZ_RESULT.format(
        emoji=emoji,
        score=result.score,
        label=label,
        savings_rate=result.savings_rate,
        emergency_target=result.emergency_target,
        debt_ratio=result.debt_ratio,
        strengths=strengths,
        recommendations=recommendations,
    )


class FinancialQuiz:
    """Quiz engine. Session state lives in the injected store; messages go out through the transport."""

    def __init__(
        self,
        store: QuizSessionStore,
        transport: MessageTransport,
        scheduler: FollowUpScheduler | None = None,
        follow_up_delay_seconds: float | None = None,
        definition: QuizDefinition = FINANCIAL_QUIZ,
    ):
        self.store = store
        self.transport = transport
        self.scheduler = scheduler or FollowUpScheduler()
        self.follow_up_delay_seconds = (
            settings.quiz_follow_up_delay_seconds if follow_up_delay_seconds is None else follow_up_delay_seconds
        )
        self.definition = definition

    def is_quiz_message(self, user_id: int, text: str | None) -> bool:
        """True if the user is mid-quiz or the text is a quiz entry keyword."""
        return self.store.has(user_id) or is_entry_keyword(text)

    async def handle_message(self, user_id: int, chat_id: int, text: str | None) -> bool:
        """Route a message into the quiz. Returns True if the quiz consumed it."""
        if self.store.has(user_id):
            return await self.process_quiz_response(user_id, chat_id, text)
        if not is_entry_keyword(text):
            return False
        if (text or "").strip().upper() == READY_KEYWORD:
            # Straight to question 1; the intro would only ask for READY again
            self.store.create(user_id)
            self.store.mark_ready(user_id)
            metrics.increment_counter("quiz_starts_total")
            await self.ask_question(chat_id, 1)
            return True
        await self.start_quiz(user_id, chat_id)
        return True

    async def start_quiz(self, user_id: int, chat_id: int) -> None:
        """Begin (or restart) the quiz for user_id and send the intro."""
        self.store.create(user_id)
        metrics.increment_counter("quiz_starts_total")
        logger.info("Quiz started for user %s", user_id)
        await self.transport.send_message(chat_id, messages.QUIZ_INTRO)

    async def process_quiz_response(self, user_id: int, chat_id: int, text: str | None) -> bool:
        """
        Apply one message to the user's session.
        Returns False when the user has no session (message not part of the quiz).
        """
        session = self.store.get(user_id)
        if session is None:
            return False
        normalized = (text or "").strip()

        is_ready = normalized.upper() == READY_KEYWORD
        if session.stage == QuizStage.AWAITING_READY:
            if is_ready:
                self.store.mark_ready(user_id)
                await self.ask_question(chat_id, 1)
                return True
            first = self.definition.question(1)
            if first is None or parse_choice(normalized, len(first.options)) is None:
                await self.transport.send_message(chat_id, messages.QUIZ_READY_REMINDER)
                return True
            # A valid option number counts as READY plus the answer to question 1
            session = self.store.mark_ready(user_id)

        number = session.current_question
        question = self.definition.question(number)
        if question is None:
            logger.warning("User %s had quiz session past question %s; dropping it", user_id, self.definition.total)
            self.store.delete(user_id)
            return False

        if is_ready and number == 1:
            await self.ask_question(chat_id, 1)
            return True

        choice = parse_choice(normalized, len(question.options))
        if choice is None:
            await self.transport.send_message(
                chat_id, messages.QUIZ_INVALID_ANSWER.format(count=len(question.options))
            )
            return True

        updated = self.store.record_answer(user_id, number, question.options[choice - 1].value)
        if updated.current_question <= self.definition.total:
            await self.ask_question(chat_id, updated.current_question)
            return True

        try:
            await self.show_results(chat_id, updated.answers)
        finally:
            self.store.delete(user_id)
        metrics.increment_counter("quiz_completions_total")
        logger.info("Quiz completed for user %s", user_id)
        self.scheduler.schedule(self.transport, chat_id, messages.QUIZ_FOLLOW_UP, self.follow_up_delay_seconds)
        return True

    def format_question(self, number: int) -> str:
        question = self.definition.question(number)
        if question is None:
            raise ValueError(f"no question {number}")
        options = "\n".join(
            messages.QUIZ_OPTION_LINE.format(index=i, label=option.label)
            for i, option in enumerate(question.options, start=1)
        )
        return messages.QUIZ_QUESTION.format(
            number=number,
            total=self.definition.total,
            prompt=question.prompt,
            options=options,
            count=len(question.options),
        )

    async def ask_question(self, chat_id: int, number: int) -> None:
        await self.transport.send_message(chat_id, self.format_question(number))

    async def show_results(self, chat_id: int, answers: dict[str, AnswerValue]) -> ScoreResult:
        result = score_answers(answers)
        await send_long_message(self.transport, chat_id, format_results(result))
        return result
