"""
Domain Types

Question records authored by the user and the enums describing them.
"""

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import ValidationError


class QuestionSource(str, Enum):
    """Where a question (or a session) comes from."""
    MANUAL = "manual"
    DOCUMENT = "document"
    DEMO = "demo"


class QuestionType(str, Enum):
    """Question types. Only free-text answers are supported."""
    OPEN_TEXT = "open-text"


def generate_id(prefix: str) -> str:
    """Create a short unique id from the current time and random hex."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def normalize_tags(tags: Optional[Iterable[str]]) -> Optional[List[str]]:
    """Trim, drop blanks and deduplicate tags, keeping first-seen order."""
    if tags is None:
        return None

    cleaned: List[str] = []
    for tag in tags:
        tag = str(tag).strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned or None


@dataclass
class Question:
    """A user-authored question and its expected answer."""
    id: str
    prompt: str
    expected_answer: Optional[str]
    type: QuestionType = QuestionType.OPEN_TEXT
    source: QuestionSource = QuestionSource.MANUAL
    tags: Optional[List[str]] = None

    @staticmethod
    def new_id() -> str:
        return generate_id("q")

    @property
    def is_scorable(self) -> bool:
        """Whether the question has an expected answer to compare against."""
        return bool(self.expected_answer and self.expected_answer.strip())

    def has_tag(self, tag: str) -> bool:
        return bool(self.tags) and tag in self.tags

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "prompt": self.prompt,
            "expectedAnswer": self.expected_answer,
            "type": self.type.value,
            "source": self.source.value,
        }
        if self.tags:
            data["tags"] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        """
        Build a question from its stored form.

        Raises:
            ValidationError: if the record lacks an id or prompt, or carries
                an unknown type or source.
        """
        if not isinstance(data, dict):
            raise ValidationError("Question record must be a mapping", invalid_value=data)

        question_id = data.get("id")
        if not isinstance(question_id, str) or not question_id:
            raise ValidationError("Question record has no id", field_name="id", invalid_value=question_id)

        prompt = data.get("prompt")
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError("Question record has no prompt", field_name="prompt", invalid_value=prompt)

        expected = data.get("expectedAnswer")
        if expected is not None and not isinstance(expected, str):
            expected = str(expected)

        try:
            question_type = QuestionType(data.get("type", QuestionType.OPEN_TEXT.value))
            source = QuestionSource(data.get("source", QuestionSource.MANUAL.value))
        except ValueError as e:
            raise ValidationError(f"Invalid question record: {e}", invalid_value=data) from e

        tags = data.get("tags")
        if tags is not None and not isinstance(tags, (list, tuple)):
            raise ValidationError("Question tags must be a list", field_name="tags", invalid_value=tags)

        return cls(
            id=question_id,
            prompt=prompt,
            expected_answer=expected,
            type=question_type,
            source=source,
            tags=normalize_tags(tags),
        )
