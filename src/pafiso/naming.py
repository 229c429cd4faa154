"""
Naming policies used to match external field names to declared attributes.

A policy converts a *declared* attribute name (``unit_price``) to the name
clients are expected to send (``unitPrice`` for camelCase).  The resolver
compares the converted name with the incoming one, so a policy only needs
the forward direction.

Usage::

    settings = PafisoSettings(naming_policy=CAMEL_CASE)
    resolve_field_path(Product, "unitPrice", settings).parts  # ("unit_price",)
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def split_words(name: str) -> list[str]:
    """Split ``unit_price``, ``unitPrice`` or ``UnitPRICE`` into words."""
    words: list[str] = []
    for chunk in re.split(r"[\s_\-]+", name):
        words.extend(_WORD_RE.findall(chunk))
    return words


class NamingPolicy(ABC):
    """Strategy converting a declared attribute name to its external form."""

    @abstractmethod
    def convert_name(self, name: str) -> str: ...


@dataclass(frozen=True)
class CamelCaseNamingPolicy(NamingPolicy):
    def convert_name(self, name: str) -> str:
        words = split_words(name)
        if not words:
            return name
        head, *tail = words
        return head.lower() + "".join(w.capitalize() for w in tail)


@dataclass(frozen=True)
class PascalCaseNamingPolicy(NamingPolicy):
    def convert_name(self, name: str) -> str:
        words = split_words(name)
        if not words:
            return name
        return "".join(w.capitalize() for w in words)


@dataclass(frozen=True)
class SeparatedNamingPolicy(NamingPolicy):
    """snake_case / kebab-case family, lower or upper."""

    separator: str
    upper: bool = False

    def convert_name(self, name: str) -> str:
        words = split_words(name)
        if not words:
            return name
        joined = self.separator.join(words)
        return joined.upper() if self.upper else joined.lower()


CAMEL_CASE = CamelCaseNamingPolicy()
PASCAL_CASE = PascalCaseNamingPolicy()
SNAKE_CASE_LOWER = SeparatedNamingPolicy("_")
SNAKE_CASE_UPPER = SeparatedNamingPolicy("_", upper=True)
KEBAB_CASE_LOWER = SeparatedNamingPolicy("-")
KEBAB_CASE_UPPER = SeparatedNamingPolicy("-", upper=True)
