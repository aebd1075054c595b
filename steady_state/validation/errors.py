from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

MESSAGES: dict[str, str] = {
    "invalid": "is invalid",
    "inclusion": "is not included in the list",
    "blank": "can't be blank",
}


@dataclass(frozen=True)
class ErrorDetail:
    attribute: str
    code: str
    message: str

    def full_message(self) -> str:
        return f"{self.attribute} {self.message}"


class Errors:
    """Errors collected by one validation pass, in the order they were added."""

    def __init__(self) -> None:
        self._details: list[ErrorDetail] = []

    def add(self, attribute: str, code: str, message: str | None = None) -> ErrorDetail:
        detail = ErrorDetail(
            attribute=attribute,
            code=code,
            message=message or MESSAGES.get(code, code),
        )
        self._details.append(detail)
        return detail

    def __getitem__(self, attribute: str) -> list[str]:
        return [detail.message for detail in self._details if detail.attribute == attribute]

    def codes(self, attribute: str) -> list[str]:
        return [detail.code for detail in self._details if detail.attribute == attribute]

    def attributes(self) -> list[str]:
        return list(dict.fromkeys(detail.attribute for detail in self._details))

    def full_messages(self) -> list[str]:
        return [detail.full_message() for detail in self._details]

    def to_dict(self) -> dict[str, list[str]]:
        return {attribute: self[attribute] for attribute in self.attributes()}

    def clear(self) -> None:
        self._details.clear()

    def __iter__(self) -> Iterator[ErrorDetail]:
        return iter(list(self._details))

    def __len__(self) -> int:
        return len(self._details)

    def __bool__(self) -> bool:
        return bool(self._details)

    def __repr__(self) -> str:
        return f"Errors({self.to_dict()!r})"
