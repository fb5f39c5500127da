"""Display module: forecast day cards and the Streamlit page.

Exports:
    - DayCard: One day of the display
    - build_day_cards: Lay out values as consecutive day cards
    - relative_day_label: "Today", "Tomorrow", "2 days ago", ...
    - DisplayService: Forecast min/max and build the cards

The Streamlit page lives in dailycast.features.display.app and is not
imported here.
"""

from dailycast.features.display.cards import DayCard, build_day_cards, relative_day_label
from dailycast.features.display.service import DisplayService

__all__ = [
    "DayCard",
    "DisplayService",
    "build_day_cards",
    "relative_day_label",
]
