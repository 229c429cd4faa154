"""
Engine settings.

``PafisoSettings`` is an immutable value.  A process-wide default is held in
a single slot; per-call overrides are derived copies::

    strict = get_default_settings().model_copy(
        update={"string_comparison": StringComparison.ORDINAL}
    )
    params.apply(items, settings=strict)
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .naming import NamingPolicy

logger = logging.getLogger(__name__)


class StringComparison(str, Enum):
    ORDINAL = "ordinal"
    ORDINAL_IGNORE_CASE = "ordinal_ignore_case"


class PafisoSettings(BaseModel):
    """
    Configuration consumed by field resolution and predicate building.

    Attributes:
        naming_policy: Converts declared attribute names to the names clients
            send.  ``None`` matches declared names directly.
        use_field_name_overrides: Honour per-field aliases (pydantic aliases,
            dataclass ``metadata["alias"]``, ``FieldAlias`` markers, column
            ``info["alias"]``).
        string_comparison: Whether filters that are not explicitly
            case-sensitive compare strings ignoring case.
        use_native_case_insensitive_match: Let backends that support it lower
            case-insensitive equality and substring tests to the registered
            native pattern-match hook instead of folding both sides.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    naming_policy: NamingPolicy | None = None
    use_field_name_overrides: bool = True
    string_comparison: StringComparison = StringComparison.ORDINAL_IGNORE_CASE
    use_native_case_insensitive_match: bool = True

    @property
    def ignore_case(self) -> bool:
        return self.string_comparison is StringComparison.ORDINAL_IGNORE_CASE


_default_settings = PafisoSettings()


def get_default_settings() -> PafisoSettings:
    return _default_settings


def set_default_settings(settings: PafisoSettings) -> None:
    """Replace the process-wide default settings."""
    global _default_settings
    _default_settings = settings
    logger.debug("Default pafiso settings replaced: %r", settings)


def resolve_settings(settings: PafisoSettings | None) -> PafisoSettings:
    return settings if settings is not None else _default_settings
