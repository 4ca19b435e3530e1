"""tablewatch reporting module.

Usage:
    from tablewatch.reporting import print_outputs, render_output

    print_outputs(listener.feed(payload))
"""

from .console import card_text, print_outputs, render_output

__all__ = [
    "card_text",
    "print_outputs",
    "render_output",
]
