"""Keyword rules for priority and category classification.

The same tables are rendered into the extraction prompt and used by the
local classifiers, so there is only one copy of the vocabulary.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..models.task import Category, Priority

T = TypeVar("T")


@dataclass(frozen=True)
class KeywordRule(Generic[T]):
    """Tag assigned when any of the keywords appears in the text."""

    tag: T
    keywords: tuple[str, ...]
    hint: str = ""


@dataclass(frozen=True)
class KeywordClassifier(Generic[T]):
    """Ordered rules with a default. The first matching rule wins."""

    rules: tuple[KeywordRule[T], ...]
    default: T
    default_hint: str = ""

    def classify(self, text: str) -> T:
        lowered = text.lower()
        for rule in self.rules:
            if any(keyword in lowered for keyword in rule.keywords):
                return rule.tag
        return self.default

    def render(self) -> str:
        """Render the rules as prompt bullet lines."""
        lines = []
        for rule in self.rules:
            keywords = ", ".join(f'"{k}"' for k in rule.keywords)
            hint = f" ({rule.hint})" if rule.hint else ""
            lines.append(f"- **{_label(rule.tag)}**{hint}: {keywords}")
        default_hint = f" ({self.default_hint})" if self.default_hint else ""
        lines.append(f"- **{_label(self.default)}**{default_hint}: when no keyword above applies (default)")
        return "\n".join(lines)


def _label(tag: object) -> str:
    return getattr(tag, "value", str(tag))


PRIORITY_RULES: KeywordClassifier[Priority] = KeywordClassifier(
    rules=(
        KeywordRule(
            Priority.HIGH,
            (
                "급하게", "급한", "중요", "빨리", "꼭", "반드시", "긴급", "시급", "데드라인", "마감",
                "urgent", "asap", "important", "must", "deadline", "critical",
            ),
            hint="urgency or importance",
        ),
        KeywordRule(
            Priority.LOW,
            (
                "여유롭게", "천천히", "언젠가", "나중에", "시간 있을 때",
                "someday", "whenever", "later", "no rush", "eventually",
            ),
            hint="leisure or no pressure",
        ),
    ),
    default=Priority.MEDIUM,
    default_hint='"보통", "적당히", "normal"',
)

CATEGORY_RULES: KeywordClassifier[Category] = KeywordClassifier(
    rules=(
        KeywordRule(
            Category.WORK,
            (
                "회의", "보고서", "프로젝트", "업무", "발표", "미팅", "클라이언트", "제안서", "회사",
                "meeting", "report", "project", "presentation", "client", "proposal", "office",
            ),
        ),
        KeywordRule(
            Category.HEALTH,
            (
                "운동", "병원", "건강", "요가", "헬스", "필라테스", "검진", "약국", "약 먹", "치료",
                "workout", "exercise", "hospital", "doctor", "yoga", "gym", "checkup", "medicine",
            ),
        ),
        KeywordRule(
            Category.STUDY,
            (
                "공부", "책", "강의", "학습", "교육", "자격증", "시험", "과제", "독서",
                "study", "book", "lecture", "course", "exam", "homework", "certificate",
            ),
        ),
        KeywordRule(
            Category.PERSONAL,
            (
                "쇼핑", "친구", "가족", "개인", "취미", "영화", "데이트", "약속", "장 보",
                "shopping", "friend", "family", "hobby", "movie", "date night", "groceries",
            ),
        ),
    ),
    default=Category.PERSONAL,
    default_hint="use context when keywords are ambiguous",
)


def classify_priority(text: str) -> Priority:
    return PRIORITY_RULES.classify(text)


def classify_category(text: str) -> Category:
    return CATEGORY_RULES.classify(text)
