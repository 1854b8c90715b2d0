"""Finding model for a single span flagged by the grammar checker.

The field layout follows the LanguageTool ``/v2/check`` match payload so that
raw server responses validate directly::

    {
        "message": "Possible agreement error",
        "shortMessage": "Grammatical problem",
        "replacements": [{"value": "doesn't"}],
        "offset": 4,
        "length": 4,
        "context": {"text": "She dont like apples.", "offset": 4, "length": 4},
        "rule": {"id": "DONT_DOESNT", "issueType": "grammar"}
    }

Offsets always refer to the content that was submitted for analysis, not to
the buffer after later edits.
"""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FindingContext(BaseModel):
    """Sentence or local window of text surrounding a finding."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    text: str = ""
    offset: int = Field(default=0, ge=0)
    length: int = Field(default=0, ge=0)

    @field_validator("text", mode="before")
    def _coerce_text(cls, value: object) -> str:
        return "" if value is None else str(value)

    def highlighted(self, marker: str = "**") -> str:
        """Return the context text with the flagged span wrapped in ``marker``."""

        if not self.text:
            return ""
        start = max(0, min(len(self.text), self.offset))
        end = max(start, min(len(self.text), start + max(self.length, 1)))
        return f"{self.text[:start]}{marker}{self.text[start:end]}{marker}{self.text[end:]}"


class Finding(BaseModel):
    """A flagged span of text with its candidate replacements.

    Core fields:
    - message: Checker-provided description of the issue
    - short_message: Abbreviated description (``shortMessage`` on the wire)
    - replacements: Ordered candidate strings, possibly empty
    - offset / length: Span within the analysed content
    - context: Surrounding sentence, used for grouping and display

    Checker metadata (optional):
    - rule_id: LanguageTool rule identifier
    - issue_type: LanguageTool issue type (e.g. "misspelling", "grammar")
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    message: str
    short_message: str = Field(default="", alias="shortMessage")
    replacements: List[str] = Field(default_factory=list)
    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    context: FindingContext = Field(default_factory=FindingContext)
    rule_id: str = Field(default="", alias="ruleId")
    issue_type: str = Field(default="", alias="issueType")

    @model_validator(mode="before")
    @classmethod
    def _flatten_rule(cls, data: Any) -> Any:
        # LanguageTool nests rule metadata under "rule"
        if isinstance(data, dict) and isinstance(data.get("rule"), dict):
            data = dict(data)
            rule = data.pop("rule")
            data.setdefault("ruleId", rule.get("id", ""))
            data.setdefault("issueType", rule.get("issueType", ""))
        return data

    @field_validator("message", "short_message", "rule_id", "issue_type", mode="before")
    def _coerce_strings(cls, value: object) -> str:
        return "" if value is None else str(value)

    @field_validator("replacements", mode="before")
    def _normalise_replacements(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            value = [value]
        result: list[str] = []
        for item in value:  # type: ignore[union-attr]
            if isinstance(item, dict):
                item = item.get("value")
            if item is None:
                continue
            result.append(str(item))
        return result

    @field_validator("context", mode="before")
    def _normalise_context(cls, value: object) -> object:
        # a bare string is treated as the context text
        if value is None:
            return {}
        if isinstance(value, str):
            return {"text": value}
        return value

    @property
    def end(self) -> int:
        return self.offset + self.length

    def matched_text(self, content: str) -> str:
        """Return the flagged span as it appears in ``content``."""

        return content[self.offset : self.end]

    def fits(self, content: str) -> bool:
        """True when the span lies inside ``content``."""

        return self.end <= len(content)
