from typing import Optional

from countrycard.schemas.country_card import BoardState, SearchOutcome
from countrycard.services.card_renderer import render_outcome


class DisplayBoard:
    """
    The single "current result" shown to the user.

    Searches write to it as they progress; whichever search settles last owns
    the result. Overlapping searches are not cancelled or merged.
    """

    def __init__(self):
        self.query: Optional[str] = None
        self.loading: Optional[str] = None
        self.outcome: Optional[SearchOutcome] = None
        self.card: str = ""

    def show_loading(self, text: str = "Loading…"):
        self.loading = text

    def hide_loading(self):
        self.loading = None

    def clear(self):
        self.outcome = None
        self.card = ""

    def publish(self, outcome: SearchOutcome):
        self.outcome = outcome
        self.card = render_outcome(outcome)

    def snapshot(self) -> BoardState:
        return BoardState(
            query=self.query,
            loading=self.loading,
            outcome=self.outcome,
            card=self.card,
        )
