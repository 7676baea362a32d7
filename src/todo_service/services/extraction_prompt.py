"""Prompt construction for natural-language task extraction."""

import json
from datetime import datetime

from ..models.extraction import ExtractionResult
from .date_anchors import WEEKDAY_LABELS, WEEKDAY_NAMES, DateAnchors, format_date
from .keywords import CATEGORY_RULES, PRIORITY_RULES

DEFAULT_DUE_TIME = "09:00"

# Time-of-day words without a specific hour
TIME_OF_DAY_DEFAULTS = [
    ("아침", "morning", "09:00"),
    ("점심", "lunch", "12:00"),
    ("오후", "afternoon", "14:00"),
    ("저녁", "evening", "18:00"),
    ("밤", "night", "21:00"),
]

EXTRACTION_SCHEMA = ExtractionResult.model_json_schema()


def _weekday_lines(anchors: DateAnchors) -> tuple[str, str]:
    this_lines = []
    next_lines = []
    for name in WEEKDAY_NAMES:
        label = WEEKDAY_LABELS[name]
        this_lines.append(
            f'- "이번 주 {label}" / "이번주 {label}" / "this {name.title()}" -> {format_date(anchors.this_week[name])}'
        )
        next_lines.append(
            f'- "다음 주 {label}" / "다음주 {label}" / "next {name.title()}" -> {format_date(anchors.next_week[name])}'
        )
    return "\n".join(this_lines), "\n".join(next_lines)


def _example(text: str, output: dict[str, str], note: str = "") -> str:
    analysis = f"\n**Analysis**: {note}" if note else ""
    return f'**Input**: "{text}"{analysis}\n**Output**:\n{json.dumps(output, ensure_ascii=False, indent=2)}'


def _examples(anchors: DateAnchors) -> str:
    today = format_date(anchors.today)
    tomorrow = format_date(anchors.tomorrow)
    examples = [
        _example(
            "내일 오전 10시에 중요한 팀 회의",
            {
                "title": "팀 회의",
                "description": "내일 오전에 있을 중요한 팀 회의에 참석합니다",
                "due_date": tomorrow,
                "due_time": "10:00",
                "priority": "High",
                "category": "Work",
            },
        ),
        _example(
            "내일 오후 3시까지 프로젝트 발표 준비하기",
            {
                "title": "프로젝트 발표 준비",
                "description": "프로젝트 발표를 위한 자료를 준비하고 검토합니다",
                "due_date": tomorrow,
                "due_time": "15:00",
                "priority": "Medium",
                "category": "Work",
            },
        ),
        _example(
            "이번 주 금요일 저녁에 친구들이랑 저녁 약속",
            {
                "title": "친구들과 저녁 약속",
                "description": "친구들과 함께 저녁 식사를 하며 시간을 보냅니다",
                "due_date": format_date(anchors.this_week["friday"]),
                "due_time": "18:00",
                "priority": "Medium",
                "category": "Personal",
            },
        ),
        _example(
            "다음 주 월요일 아침에 운동하기",
            {
                "title": "운동하기",
                "description": "다음 주 월요일 아침에 규칙적인 운동을 시작합니다",
                "due_date": format_date(anchors.next_week["monday"]),
                "due_time": "09:00",
                "priority": "Medium",
                "category": "Health",
            },
        ),
        _example(
            "오후 5시에 급하게 보고서 제출",
            {
                "title": "보고서 제출",
                "description": "급하게 처리해야 하는 보고서를 작성하고 제출합니다",
                "due_date": today,
                "due_time": "17:00",
                "priority": "High",
                "category": "Work",
            },
        ),
        _example(
            "급하게 보고서 제출하기",
            {
                "title": "보고서 제출",
                "description": "급하게 처리해야 하는 보고서를 준비하고 제출합니다",
                "due_date": today,
                "due_time": "09:00",
                "priority": "High",
                "category": "Work",
            },
            note=f"no date expression -> today ({today}); no time expression -> default 09:00",
        ),
        _example(
            "장 보러 가기",
            {
                "title": "장 보러 가기",
                "description": "필요한 물건들을 구매하기 위해 마트에 갑니다",
                "due_date": today,
                "due_time": "09:00",
                "priority": "Medium",
                "category": "Personal",
            },
            note="short input still gets a description with added context",
        ),
        _example(
            "Finish the quarterly report by Friday 4pm",
            {
                "title": "Finish quarterly report",
                "description": "Complete and review the quarterly report before the Friday deadline",
                "due_date": format_date(anchors.this_week["friday"]),
                "due_time": "16:00",
                "priority": "Medium",
                "category": "Work",
            },
        ),
    ]
    return "\n\n".join(f"### Example {i}\n{example}" for i, example in enumerate(examples, start=1))


def build_extraction_prompt(text: str, anchors: DateAnchors, now: datetime) -> str:
    """Build the extraction prompt for one normalized input.

    Args:
        text: Normalized, validated task text
        anchors: Anchor table for the same reference instant as ``now``
        now: Reference instant in the service timezone

    Returns:
        Prompt string for a schema-constrained extraction call
    """
    today = format_date(anchors.today)
    this_week_lines, next_week_lines = _weekday_lines(anchors)
    time_of_day_lines = "\n".join(
        f'  * "{korean}" / "{english}" -> {default}' for korean, english, default in TIME_OF_DAY_DEFAULTS
    )

    return f"""You convert free-form task descriptions (mostly Korean, sometimes English) into structured task data.
Follow the rules below **exactly**.

### Input
"{text}"

### Current point in time (important!)
- **Today: {today} ({anchors.year}-{anchors.month:02d}-{anchors.day:02d}, {anchors.weekday_name.title()}, {WEEKDAY_LABELS[anchors.weekday_name]})**
- Current time: {now.strftime("%H:%M:%S")}
- Tomorrow (내일): {format_date(anchors.tomorrow)}
- Day after tomorrow (모레): {format_date(anchors.day_after_tomorrow)}

### Critical rules
1. **Never produce a date earlier than today ({today}).**
2. **If the input contains no date expression at all, the due date is today ({today}).**
3. **The word "today" does not have to appear: no date expression means today ({today}).**

### 1. Date rules
Convert relative expressions to these exact dates:
- No date expression -> {today}
- "오늘" / "today" -> {today}
- "내일" / "tomorrow" -> {format_date(anchors.tomorrow)}
- "모레" / "the day after tomorrow" -> {format_date(anchors.day_after_tomorrow)}

This week:
{this_week_lines}

Next week:
{next_week_lines}

### 2. Time rules
- A specific hour always wins. Convert to 24-hour HH:MM:
  * "1시", "오전 1시", "1am" -> 01:00
  * "오후 1시", "오후 한시", "1pm" -> 13:00
  * "오후 3시", "오후 세시", "3pm" -> 15:00
  * "15시", "15:00" -> 15:00
  * "오후 5시", "저녁 5시" -> 17:00
  * "밤 11시", "오후 11시", "11pm" -> 23:00
- Only a time-of-day word, no specific hour:
{time_of_day_lines}
- No time expression at all -> {DEFAULT_DUE_TIME}

### 3. Priority keywords
{PRIORITY_RULES.render()}

### 4. Category keywords
{CATEGORY_RULES.render()}
- When keywords are ambiguous, pick the category that best fits the context.

### 5. Title rules
- Keep only the core action, concise (10-30 characters recommended).
- Drop particles and filler such as "~까지", "~에", "~전에", "해야 함".
- Example: "내일 오전에 팀 회의 준비해야 함" -> "팀 회의 준비"

### 6. Description rules (important!)
- Always write a description when any plausible context can be inferred; avoid empty strings.
- Put the context that is not in the title here: concrete actions, purpose, people, places, caveats.
- For short inputs add general context, e.g. "보고서 작성" -> "보고서를 작성하고 검토합니다".
- Write the description in the same language as the input.

### 7. Output format
Return exactly one object with these fields:
{{
  "title": "task title",
  "description": "details (optional)",
  "due_date": "YYYY-MM-DD",
  "due_time": "HH:MM",
  "priority": "High" | "Medium" | "Low",
  "category": "Work" | "Personal" | "Study" | "Health"
}}

{_examples(anchors)}

### Final reminders
- **No date expression -> {today}.**
- **Never produce a date before {today}.**
- **Always provide a description when possible.**
- Convert specific hours exactly and relative dates to YYYY-MM-DD.
"""
