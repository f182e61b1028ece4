"""Template filters that build declarations can refer to by name."""

from __future__ import annotations

import typing as typ

from .social import social

if typ.TYPE_CHECKING:
    from .config.models import TemplateFilter

FILTERS: dict[str, TemplateFilter] = {
    "social": social,
}

__all__ = ["FILTERS"]
