"""Tests for console rendering of dispatch outputs."""

from rich.console import Console

from tablewatch.core.dispatch import DispatchOutput, OutputType
from tablewatch.reporting import card_text, print_outputs, render_output


class TestCardText:
    def test_plain_text_unchanged(self):
        assert card_text("Flop: A♠ 7♣ 2♦ | Pot: 42").plain == "Flop: A♠ 7♣ 2♦ | Pot: 42"

    def test_cards_colored_by_suit(self):
        text = card_text("K♥ and 2♣")
        styles = {text.plain[s.start:s.end]: str(s.style) for s in text.spans}
        assert styles["K♥"] == "bold red"
        assert styles["2♣"] == "bold green"

    def test_no_cards(self):
        text = card_text("Alice folded")
        assert text.plain == "Alice folded"


class TestRenderOutput:
    def test_event(self):
        output = DispatchOutput(OutputType.EVENT, message="Alice bet 40", hand_number=3)
        assert render_output(output).plain == "[#3] Alice bet 40"

    def test_your_turn_includes_summary(self, make_view):
        output = DispatchOutput(
            OutputType.YOUR_TURN, snapshot=make_view(), summary="Hand #1 | PREFLOP | Pot: 30"
        )
        assert render_output(output).plain == "YOUR_TURN\nHand #1 | PREFLOP | Pot: 30"

    def test_hand_result(self, make_view):
        output = DispatchOutput(OutputType.HAND_RESULT, snapshot=make_view(), hand_number=4)
        assert render_output(output).plain == "HAND_RESULT  hand #4"

    def test_rebuy_shows_chips(self, make_view):
        output = DispatchOutput(
            OutputType.REBUY_AVAILABLE, snapshot=make_view(phase="WAITING", yourChips=0)
        )
        assert render_output(output).plain == "REBUY_AVAILABLE  chips: 0"

    def test_table_closed(self):
        assert render_output(DispatchOutput(OutputType.TABLE_CLOSED)).plain == "TABLE_CLOSED"


class TestPrintOutputs:
    def test_prints_each_output(self):
        console = Console(record=True, width=100)
        print_outputs(
            [
                DispatchOutput(OutputType.EVENT, message="Bob checked", hand_number=2),
                DispatchOutput(OutputType.TABLE_CLOSED),
            ],
            console=console,
        )
        exported = console.export_text()
        assert "[#2] Bob checked" in exported
        assert "TABLE_CLOSED" in exported
