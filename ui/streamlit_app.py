"""
Streamlit render loop: polls the fetch orchestrator every frame and draws
heading, summary (or a spinner) and the animated scene. Never does network I/O.
"""
import time

import streamlit as st

from app.config import get_settings
from graph.orchestrator import FetchOrchestrator
from ui.scene import background_color, heading, scene_frame

settings = get_settings()


@st.cache_resource
def get_orchestrator() -> FetchOrchestrator:
    return FetchOrchestrator()


st.set_page_config(page_title="Weather Alerts", page_icon="🌦️", layout="centered")

if "started_at" not in st.session_state:
    st.session_state.started_at = time.monotonic()


@st.fragment(run_every=settings.frame_interval)
def weather_panel():
    view = get_orchestrator().poll()
    elapsed = time.monotonic() - st.session_state.started_at

    st.markdown(
        f"<style>.stApp {{ background-color: {background_color(view.category)}; }}</style>",
        unsafe_allow_html=True,
    )
    st.title(heading(view.location_label, view.short_description))
    st.divider()

    if view.has_data:
        st.text(view.summary_text)
    else:
        st.info("⏳ Fetching weather data...")

    st.markdown(
        f"<div style='font-size: 96px; text-align: center'>{scene_frame(view.category, elapsed)}</div>",
        unsafe_allow_html=True,
    )


weather_panel()
