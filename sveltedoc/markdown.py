"""Markdown codec for ComponentDoc records.

The encoder renders one heading and up to three pipe tables; the decoder is
a small line-oriented state machine that reads that layout back.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Callable, List, Optional

from .models import ComponentDoc, EventDoc, PropDoc, SlotDoc

MISSING = "-"

PROPS_HEADER = "| Name | Type | Default | Required | Description |"
PROPS_SEPARATOR = "|------|------|---------|----------|-------------|"
EVENTS_HEADER = "| Name | Detail | Description |"
EVENTS_SEPARATOR = "|------|--------|-------------|"
SLOTS_HEADER = "| Name | Props | Description |"
SLOTS_SEPARATOR = "|------|-------|-------------|"

_SEPARATOR_ROW = re.compile(r"^\|(\s*:?-+:?\s*\|)+$")


def _cell(value: Optional[str]) -> str:
    if not value:
        return MISSING
    # a table row must stay on one line
    folded = " ".join(line.strip() for line in value.splitlines() if line.strip())
    return folded or MISSING


def render_markdown(doc: ComponentDoc) -> str:
    """Render ``doc`` as Markdown. Output depends only on ``doc``."""
    parts: List[str] = [f"# {doc.name}\n\n"]

    if doc.description:
        parts.append(f"{doc.description}\n\n")

    if doc.props:
        parts.append("## Props\n")
        parts.append(f"{PROPS_HEADER}\n{PROPS_SEPARATOR}\n")
        for prop in doc.props:
            required = "Yes" if prop.required else "No"
            parts.append(
                f"| {prop.name} | {prop.type} | {_cell(prop.default_value)} | {required} "
                f"| {_cell(prop.description)} |\n"
            )
        parts.append("\n")

    if doc.events:
        parts.append("## Events\n")
        parts.append(f"{EVENTS_HEADER}\n{EVENTS_SEPARATOR}\n")
        for event in doc.events:
            parts.append(f"| {event.name} | {_cell(event.detail)} | {_cell(event.description)} |\n")
        parts.append("\n")

    if doc.slots:
        parts.append("## Slots\n")
        parts.append(f"{SLOTS_HEADER}\n{SLOTS_SEPARATOR}\n")
        for slot in doc.slots:
            props = ", ".join(slot.props)
            parts.append(f"| {slot.name} | {_cell(props)} | {_cell(slot.description)} |\n")
        parts.append("\n")

    return "".join(parts)


def parse_markdown(
    markdown: str, *, now: Callable[[], datetime] | None = None
) -> ComponentDoc:
    """Rebuild a ComponentDoc from text produced by :func:`render_markdown`.

    There is no validation: unknown sections are ignored and rows with too few
    cells are skipped, so foreign documents decode to a partial record.
    """
    lines = markdown.split("\n")
    name = lines[0].strip()
    if name.startswith("# "):
        name = name[2:].strip()

    props: List[PropDoc] = []
    events: List[EventDoc] = []
    slots: List[SlotDoc] = []
    description_lines: List[str] = []
    section: Optional[str] = None
    # table preamble still expected after a section heading: header, then separator
    pending_header = False
    pending_separator = False

    for raw in lines[1:]:
        line = raw.strip()

        if line.startswith("## "):
            section = line[3:].strip().lower()
            pending_header = True
            pending_separator = False
            continue

        if section is None:
            if line:
                description_lines.append(line)
            continue

        if not line.startswith("|"):
            continue

        if pending_header:
            pending_header = False
            pending_separator = True
            if not _SEPARATOR_ROW.match(line):
                continue
        if pending_separator:
            pending_separator = False
            if _SEPARATOR_ROW.match(line):
                continue

        cells = [cell.strip() for cell in line.split("|")[1:-1]]
        if section == "props" and len(cells) >= 5:
            props.append(
                PropDoc(
                    name=cells[0],
                    type=cells[1],
                    default_value=None if cells[2] == MISSING else cells[2],
                    required=cells[3] == "Yes",
                    description=_decode_text(cells[4]),
                )
            )
        elif section == "events" and len(cells) >= 3:
            events.append(
                EventDoc(name=cells[0], detail=cells[1], description=_decode_text(cells[2]))
            )
        elif section == "slots" and len(cells) >= 3:
            slot_props = () if cells[1] == MISSING else tuple(p.strip() for p in cells[1].split(","))
            slots.append(
                SlotDoc(name=cells[0], props=slot_props, description=_decode_text(cells[2]))
            )

    clock = now or (lambda: datetime.now(UTC))
    return ComponentDoc(
        name=name,
        description="\n".join(description_lines).strip(),
        props=tuple(props),
        events=tuple(events),
        slots=tuple(slots),
        last_updated=clock(),
    )


def _decode_text(cell: str) -> str:
    return "" if cell == MISSING else cell


__all__ = ["parse_markdown", "render_markdown"]
