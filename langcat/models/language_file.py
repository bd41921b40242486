from typing import Any

from pydantic import BaseModel, field_validator, model_validator


class LanguageRow(BaseModel):
    """One ``{"id": ..., "text": ...}`` entry of a language file."""

    id: str = ""
    text: str = ""

    @field_validator("id", "text", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class LanguageFile(BaseModel):
    """
    Parsed language file.

    Expected document:
        {"lang": [{"id": "greeting.hello", "text": "Hello"}, ...]}

    Unknown fields are ignored; a document without ``lang`` has no rows.
    """

    lang: list[LanguageRow] = []

    @model_validator(mode="before")
    @classmethod
    def _null_document(cls, data: Any) -> Any:
        # A bare `null` file is an empty language, not a format error
        return {} if data is None else data

    @field_validator("lang", mode="before")
    @classmethod
    def _null_as_no_rows(cls, value: Any) -> Any:
        return [] if value is None else value

    def as_mapping(self) -> dict[str, str]:
        """Return rows as ``{id: text}``; a repeated id keeps its last text."""
        return {row.id: row.text for row in self.lang}
