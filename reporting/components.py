from __future__ import annotations

from html import escape
from typing import Iterable, List, Sequence

from .schema import InputGroup, ResultItem, Section


def value_with_unit(item: ResultItem) -> str:
    """Join value and unit with one space."""

    return f"{escape(item.value)} {escape(item.unit)}"


def data_table(items: Iterable[ResultItem]) -> str:
    rows: List[str] = []
    for item in items:
        highlighted = getattr(item, "isHighlighted", False)
        tr = '<tr class="highlighted-row">' if highlighted else "<tr>"
        rows.append(
            f'{tr}<td class="table-label">{escape(item.label)}</td>'
            f'<td class="table-value">{value_with_unit(item)}</td></tr>'
        )
    return '<table class="data-table">' + "".join(rows) + "</table>"


def section_block(section: Section) -> str:
    return (
        '<div class="section">'
        f'<div class="section-header"><div class="section-title">{escape(section.title)}</div></div>'
        f'<div class="section-content">{data_table(section.items)}</div>'
        "</div>"
    )


def headline_block(results: Sequence[ResultItem], title: str) -> str:
    """Prominent banner for the final results; empty input gives no markup."""

    if not results:
        return ""
    cells = "".join(
        '<div class="final-result-item">'
        f'<div class="final-result-label">{escape(item.label)}</div>'
        f'<div class="final-result-value">{value_with_unit(item)}</div>'
        "</div>"
        for item in results
    )
    return (
        '<div class="final-results-section">'
        f'<div class="final-results-header"><div class="final-results-title">{escape(title)}</div></div>'
        f'<div class="final-results-content"><div class="final-results-grid">{cells}</div></div>'
        "</div>"
    )


def input_group_block(group: InputGroup) -> str:
    return (
        '<div class="input-group">'
        f'<div class="input-group-header"><div class="input-group-title">{escape(group.title)}</div></div>'
        f'<div class="input-group-content">{data_table(group.items)}</div>'
        "</div>"
    )


def inputs_block(groups: Sequence[InputGroup], title: str) -> str:
    groups_html = "".join(input_group_block(g) for g in groups)
    return (
        '<div class="inputs-section">'
        f'<div class="inputs-title">{escape(title)}</div>'
        f'<div class="inputs-grid">{groups_html}</div>'
        "</div>"
    )
