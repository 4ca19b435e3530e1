"""Console rendering of dispatch outputs for a human following a table.

Usage:
    from tablewatch.reporting import print_outputs
    print_outputs(listener.feed(payload))
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.text import Text

from tablewatch.core.cards import SUIT_SYMBOLS
from tablewatch.core.dispatch import DispatchOutput, OutputType

SUIT_COLORS = {"h": "red", "d": "blue", "c": "green", "s": "white"}

OUTPUT_STYLES = {
    OutputType.EVENT: "white",
    OutputType.YOUR_TURN: "bold green",
    OutputType.HAND_RESULT: "bold yellow",
    OutputType.REBUY_AVAILABLE: "bold magenta",
    OutputType.WAITING_FOR_PLAYERS: "cyan",
    OutputType.TABLE_CLOSED: "bold red",
}

# A formatted card inside an event message, e.g. "A♠"
_GLYPH_TO_SUIT = {glyph: suit for suit, glyph in SUIT_SYMBOLS.items()}
_CARD_RE = re.compile(r"([2-9TJQKA])([" + "".join(_GLYPH_TO_SUIT) + r"])")


def card_text(message: str, base_style: str = "white") -> Text:
    """Return ``message`` with every card glyph coloured by suit."""
    text = Text()
    pos = 0
    for m in _CARD_RE.finditer(message):
        text.append(message[pos:m.start()], style=base_style)
        color = SUIT_COLORS[_GLYPH_TO_SUIT[m.group(2)]]
        text.append(m.group(0), style=f"bold {color}")
        pos = m.end()
    text.append(message[pos:], style=base_style)
    return text


def render_output(output: DispatchOutput) -> Text:
    """One line (or block, for YOUR_TURN) describing ``output``."""
    style = OUTPUT_STYLES.get(output.type, "white")

    if output.type is OutputType.EVENT:
        text = Text(f"[#{output.hand_number}] ", style="dim")
        text.append_text(card_text(output.message or "", style))
        return text

    label = Text(output.type.value, style=style)
    if output.type is OutputType.YOUR_TURN:
        label.append("\n")
        label.append_text(card_text(output.summary or "", "white"))
    elif output.type is OutputType.HAND_RESULT:
        label.append(f"  hand #{output.hand_number}", style="dim")
    elif output.snapshot is not None:
        label.append(f"  chips: {output.snapshot.your_chips}", style="dim")
    return label


def print_outputs(outputs: list[DispatchOutput], console: Console | None = None) -> None:
    """Render each output to ``console`` (stdout by default)."""
    console = console or Console()
    for output in outputs:
        console.print(render_output(output))
