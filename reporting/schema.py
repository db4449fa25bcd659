from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportDataError(ValueError):
    """Raised when required report data is missing or invalid."""


class _Frozen(BaseModel):
    # value/unit are opaque text; numbers sent over JSON are kept as their string form
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)


class ResultItem(_Frozen):
    label: str
    value: str
    unit: str = ""


class SectionItem(ResultItem):
    isHighlighted: bool = False


class Section(_Frozen):
    title: str
    items: List[SectionItem] = Field(default_factory=list)


class InputGroup(_Frozen):
    title: str
    items: List[ResultItem] = Field(default_factory=list)


class ReportPayload(_Frozen):
    """Calculation results handed to the renderer.

    ``subtitle`` is accepted for compatibility with existing callers but is
    not rendered anywhere.
    """

    title: str
    subtitle: str = ""
    finalResults: Optional[List[ResultItem]] = None
    sections: List[Section]
    inputs: Optional[List[InputGroup]] = None
