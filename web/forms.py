"""Minimal HTML form validation."""

from typing import Mapping


class FormErrors(dict[str, list[str]]):
    """Field name to error messages."""

    def add(self, field: str, message: str) -> None:
        self.setdefault(field, []).append(message)


class Form:
    """Wraps posted form data and collects validation errors."""

    def __init__(self, data: Mapping[str, str]):
        self.data = data
        self.errors = FormErrors()

    def has(self, field: str) -> bool:
        return bool(str(self.data.get(field) or "").strip())

    def required(self, *fields: str) -> None:
        for field in fields:
            if not self.has(field):
                self.errors.add(field, "This field cannot be blank")

    def check(self, ok: bool, field: str, message: str) -> None:
        if not ok:
            self.errors.add(field, message)

    def valid(self) -> bool:
        return not self.errors
