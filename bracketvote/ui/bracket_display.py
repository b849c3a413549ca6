"""Bracket voting TUI: landing screen, matchup view and winner screen."""

import random
import time
from typing import Callable, ClassVar, Sequence

from textual.binding import BindingType

try:
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.css.query import NoMatches
    from textual.reactive import reactive
    from textual.screen import Screen
    from textual.timer import Timer
    from textual.widgets import Button, Footer, Header, Static
except ImportError:
    raise ImportError(
        "Missing required dependencies. Please install with: pip install textual pydantic"
    )

from ..engine import (
    InvalidSelection,
    Shuffler,
    advance_if_ready,
    current_matchup,
    initialize,
    select,
)
from ..models import DEFAULT_ROSTER, Contestant, Tournament
from ..utils.logging import log, set_console_logging

CONFETTI_CHARS = "*+x•✦✧"
CONFETTI_WIDTH = 60


def render_confetti(particle_count: int, rng: random.Random | None = None) -> str:
    """A line of scattered confetti with ``particle_count`` pieces"""
    rng = rng or random.Random()
    cells = [" "] * CONFETTI_WIDTH
    for _ in range(min(particle_count, CONFETTI_WIDTH)):
        cells[rng.randrange(CONFETTI_WIDTH)] = rng.choice(CONFETTI_CHARS)
    return "".join(cells)


class ContestantCard(Vertical):
    """One side of the current matchup"""

    def __init__(self, side: int, id: str | None = None):
        super().__init__(classes="card", id=id)
        self.side = side
        self.contestant: Contestant | None = None

    def compose(self) -> ComposeResult:
        yield Static("", classes="card-label")
        yield Static("", classes="card-image")
        yield Button("Choose", id=f"pick-{self.side}", classes="choose")

    def show(self, contestant: Contestant) -> None:
        self.contestant = contestant
        self.query_one(".card-label", Static).update(f"Contestant {contestant.label}")
        self.query_one(".card-image", Static).update(f"🖼  {contestant.image_ref}")
        self.remove_class("chosen", "dimmed")


class LandingScreen(Screen[None]):
    """Title screen with a single start button"""

    BINDINGS: ClassVar[list[BindingType]] = [
        ("enter", "start", "Start"),
    ]

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static("ARMI TIER LIST", id="landing-title"),
            Button("START GAME!", id="start", variant="primary"),
            id="landing",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "start":
            event.stop()
            self.action_start()

    def action_start(self) -> None:
        log("🚦 Start pressed on landing screen")
        self.dismiss(None)


class BracketDisplay(App[None]):
    """Renders the bracket and turns key presses / clicks into picks"""

    CSS: ClassVar[
        str
    ] = """
    Screen {
        layout: vertical;
    }

    Header {
        dock: top;
        height: 1;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-1;
    }

    #landing {
        align: center middle;
        height: 1fr;
    }

    #landing-title {
        text-align: center;
        text-style: bold;
        color: $warning;
        margin: 0 0 2 0;
        width: 1fr;
    }

    #main-container {
        height: 1fr;
        padding: 0 1;
    }

    #round-info {
        background: $primary;
        color: $text;
        text-align: center;
        height: 1;
    }

    #prompt {
        text-align: center;
        margin: 1 0;
    }

    #matchup {
        height: 1fr;
    }

    .card {
        width: 1fr;
        height: auto;
        border: solid $primary;
        padding: 1 2;
        margin: 0 1;
    }

    .card-label {
        text-style: bold;
        text-align: center;
    }

    .card-image {
        text-align: center;
        margin: 1 0;
    }

    .chosen {
        border: double $success;
        background: $success 20%;
    }

    .dimmed {
        opacity: 50%;
    }

    #winner-panel {
        align: center middle;
        height: 1fr;
    }

    #winner-title {
        text-align: center;
        text-style: bold;
        color: $warning;
    }

    #winner-card, #confetti {
        text-align: center;
        margin: 1 0;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        ("1", "pick(0)", "Pick left"),
        ("left", "pick(0)", "Pick left"),
        ("2", "pick(1)", "Pick right"),
        ("right", "pick(1)", "Pick right"),
        ("n", "restart", "New game"),
        ("q", "quit", "Quit"),
    ]

    # Reactive variables
    round_number: reactive[int] = reactive(1)

    def __init__(
        self,
        roster: Sequence[Contestant] | None = None,
        shuffle: Shuffler | None = None,
        pick_delay: float = 0.6,
        advance_delay: float = 0.5,
        celebration_duration: float = 5.0,
        show_landing: bool = True,
    ):
        super().__init__()
        self.roster: list[Contestant] = list(
            roster if roster is not None else DEFAULT_ROSTER
        )
        self.shuffle = shuffle
        self.pick_delay = pick_delay
        self.advance_delay = advance_delay
        self.celebration_duration = celebration_duration
        self.show_landing = show_landing

        self.tournament: Tournament | None = None
        # side picked in the matchup still on screen, None when accepting input
        self.selected_index: int | None = None
        self._pending_timer: Timer | None = None
        self._celebration_timer: Timer | None = None
        self._celebration_end: float = 0.0

        self.title = "ARMI TIER LIST"
        log(
            f"🎯 BracketDisplay initialized: {len(self.roster)} contestants, "
            f"pick_delay={pick_delay}, advance_delay={advance_delay}, "
            f"celebration={celebration_duration}"
        )

    def compose(self) -> ComposeResult:
        """Create the UI layout"""
        yield Header()
        yield Vertical(
            Static("", id="round-info"),
            Static("Choose your favorite", id="prompt"),
            Horizontal(
                ContestantCard(0, id="card-0"),
                ContestantCard(1, id="card-1"),
                id="matchup",
            ),
            Vertical(
                Static("Winner!", id="winner-title"),
                Static("", id="winner-card"),
                Static("", id="confetti"),
                Button("Play Again", id="play-again", variant="success"),
                id="winner-panel",
            ),
            id="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Show the landing screen or go straight into a bracket"""
        set_console_logging(False)
        log("🏁 on_mount() called")

        self.query_one("#winner-panel").display = False
        if self.show_landing:
            self.push_screen(LandingScreen(), callback=self._on_landing_closed)
        else:
            self.start_game()

    def _on_landing_closed(self, _result: None) -> None:
        # the landing screen is still on the stack until the next refresh
        self.call_after_refresh(self.start_game)

    def start_game(self) -> None:
        """Throw away any current bracket and seed a new one"""
        self._cancel_pending()
        self._stop_celebration()
        self.selected_index = None
        self.tournament = initialize(self.roster, self.shuffle)
        self.refresh_view()

    def refresh_view(self) -> None:
        """Render whatever the current tournament state calls for"""
        tournament = self.tournament
        if tournament is None:
            return

        self.round_number = tournament.round_number
        self.sub_title = f"Round {tournament.round_number}"
        round_info = self.query_one("#round-info", Static)
        matchup_panel = self.query_one("#matchup", Horizontal)
        prompt = self.query_one("#prompt", Static)
        winner_panel = self.query_one("#winner-panel", Vertical)

        if tournament.is_complete and tournament.winner is not None:
            winner = tournament.winner
            matchup_panel.display = False
            prompt.display = False
            winner_panel.display = True
            round_info.update(f"Champion after {tournament.total_rounds} rounds")
            self.query_one("#winner-card", Static).update(
                f"Contestant {winner.label}\n🖼  {winner.image_ref}"
            )
            return

        winner_panel.display = False
        matchup_panel.display = True
        prompt.display = True
        round_info.update(
            f"Round {tournament.round_number} of {tournament.total_rounds} · "
            f"Match {tournament.match_number} of {tournament.matches_in_round}"
        )

        matchup = current_matchup(tournament)
        if matchup is None:
            return
        for side, contestant in enumerate(matchup):
            self.query_one(f"#card-{side}", ContestantCard).show(contestant)

    def action_pick(self, index: int) -> None:
        """Resolve the on-screen matchup in favour of side ``index``"""
        if self.tournament is None:
            return
        if self.selected_index is not None:
            log("⏳ Pick ignored, previous pick still resolving")
            return

        try:
            self.tournament = select(self.tournament, index)
        except InvalidSelection as e:
            log(f"⚠️  Ignoring pick {index}: {e}")
            return

        self.selected_index = index
        self.query_one(f"#card-{index}", ContestantCard).add_class("chosen")
        self.query_one(f"#card-{1 - index}", ContestantCard).add_class("dimmed")

        self._schedule(self.pick_delay, self._finish_pick)

    def _finish_pick(self) -> None:
        self.selected_index = None
        if self.tournament is not None and current_matchup(self.tournament) is None:
            # hold the last pair on screen before the next round or the winner
            self._schedule(self.advance_delay, self._advance)
        else:
            self._advance()

    def _advance(self) -> None:
        if self.tournament is None:
            return
        self.tournament = advance_if_ready(self.tournament)
        self.refresh_view()
        if self.tournament.is_complete:
            self.start_celebration()

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` after ``delay`` seconds, or right away for zero"""
        if delay > 0:
            self._pending_timer = self.set_timer(delay, callback)
        else:
            self._pending_timer = None
            callback()

    def _cancel_pending(self) -> None:
        if self._pending_timer is not None:
            self._pending_timer.stop()
            self._pending_timer = None

    def start_celebration(self) -> None:
        """Scatter confetti for ``celebration_duration`` seconds"""
        self._stop_celebration()
        if self.celebration_duration <= 0:
            return
        self._celebration_end = time.monotonic() + self.celebration_duration
        self._celebration_timer = self.set_interval(0.25, self._celebrate)

    def _celebrate(self) -> None:
        time_left = self._celebration_end - time.monotonic()
        if time_left <= 0:
            self._stop_celebration()
            return
        particle_count = int(50 * (time_left / self.celebration_duration))
        self.query_one("#confetti", Static).update(render_confetti(particle_count))

    def _stop_celebration(self) -> None:
        if self._celebration_timer is not None:
            self._celebration_timer.stop()
            self._celebration_timer = None
        try:
            self.query_one("#confetti", Static).update("")
        except NoMatches:
            # widgets already torn down on exit
            pass

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "pick-0":
            self.action_pick(0)
        elif button_id == "pick-1":
            self.action_pick(1)
        elif button_id == "play-again":
            self.action_restart()

    def action_restart(self) -> None:
        """Start a new bracket"""
        if self.tournament is None:
            # still on the landing screen
            return
        log("🔄 Restart triggered")
        self.start_game()
        self.notify("New bracket shuffled")
