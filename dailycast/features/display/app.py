"""Streamlit page showing the temperature forecast as day cards.

Run with:
    streamlit run dailycast/features/display/app.py
or:
    dailycast display
"""

from __future__ import annotations

import uuid

import streamlit as st

from dailycast.core.config import get_settings
from dailycast.core.exceptions import DailycastError
from dailycast.core.logging import configure_logging, get_logger, run_id_ctx
from dailycast.features.display.cards import DayCard
from dailycast.features.display.service import DisplayService

logger = get_logger(__name__)

TODAY_BACKGROUND = "#e6f0fa"
CARD_BACKGROUND = "#ffffff"


def card_html(card: DayCard) -> str:
    """Render one day card as HTML."""
    background = TODAY_BACKGROUND if card.is_today else CARD_BACKGROUND
    weight = "bold" if card.is_today else "normal"
    return (
        f'<div style="background:{background};border:1px solid #d3d3d3;'
        f'border-radius:8px;padding:12px;margin-bottom:8px;">'
        f'<div style="font-weight:{weight};font-size:1.1em;">{card.label}</div>'
        f'<div style="color:#555;">{card.date_text}</div>'
        f"<div>{card.min_text}</div>"
        f"<div>{card.max_text}</div>"
        "</div>"
    )


def main() -> None:
    """Render the forecast page."""
    configure_logging()
    run_id_ctx.set(uuid.uuid4().hex[:12])
    settings = get_settings()

    st.set_page_config(page_title="Temperature Forecast")
    st.title("Temperature Forecast")

    try:
        cards = DisplayService().build_forecast_cards()
    except DailycastError as e:
        logger.error("display.render_failed", error_code=e.code, error=e.message, details=e.details)
        st.error(f"{e.title}: {e.message}")
        return

    for card in cards:
        st.markdown(card_html(card), unsafe_allow_html=True)

    st.caption(
        f"Seeds: Min {settings.example_min_temp:.1f}°C, Max {settings.example_max_temp:.1f}°C"
    )


if __name__ == "__main__":
    main()
