"""A Streamlit web frontend for the Crop Weather Dashboard API."""

import asyncio

import requests
import streamlit as st
import streamlit.components.v1 as components

from app.config import get_settings
from app.core.chat_widget import ChatWidget
from app.core.dashboard import DashboardController, DashboardStatus
from app.core.dashboard_client import DashboardApiClient
from app.models.weather import IconCategory

# --- Page and API Configuration ---
st.set_page_config(page_title="Weather Dashboard", page_icon="🌦️", layout="wide")
settings = get_settings()
API_BASE = settings.api_base_url

ICONS = {
    IconCategory.CLEAR: "☀️",
    IconCategory.CLOUDS: "☁️",
    IconCategory.RAIN: "🌧️",
    IconCategory.OTHER: "🌤️",
}


def get_controller() -> DashboardController:
    """Gets the dashboard controller from streamlit's session state."""
    if "controller" not in st.session_state:
        st.session_state.controller = DashboardController(
            DashboardApiClient(API_BASE, timeout=settings.cycle_timeout_seconds),
            default_location=settings.default_location,
            cycle_timeout=settings.cycle_timeout_seconds,
        )
    return st.session_state.controller


def get_chat_widget() -> ChatWidget:
    """One chatbot widget per browser session."""
    if "chat_widget" not in st.session_state:
        st.session_state.chat_widget = ChatWidget(settings.kommunicate_app_id)
    return st.session_state.chat_widget


# --- API Health Check ---
try:
    health_response = requests.get(f"{API_BASE}/health", timeout=3)
    if (
        health_response.status_code != 200
        or health_response.json().get("status") != "healthy"
    ):
        st.error(
            "API is not running or is unhealthy. Please start the backend server.",
            icon="🚨",
        )
        st.stop()
except requests.exceptions.ConnectionError:
    st.error(
        "Could not connect to the API. Please ensure the backend server is running.",
        icon="🚨",
    )
    st.stop()

get_chat_widget().load(lambda html: components.html(html, height=0))
controller = get_controller()

# --- Header and search ---
title_col, search_col = st.columns([2, 1])
with title_col:
    st.title("Weather Dashboard")
    st.caption("Personalized weather insights for your farm")
with search_col:
    location = st.text_input(
        "Location", value=controller.state.location, placeholder="Enter City"
    )
    search_clicked = st.button("Search", use_container_width=True)

if controller.state.status is DashboardStatus.IDLE:
    with st.spinner("Loading weather..."):
        asyncio.run(controller.mount())
elif search_clicked:
    with st.spinner(f"Loading weather for {location}..."):
        try:
            asyncio.run(controller.search(location))
        except ValueError:
            st.warning("Please enter a city.")

state = controller.state

if state.status is DashboardStatus.FAILED:
    st.error(f"Could not load weather: {state.error}", icon="🚨")
    st.stop()

if state.snapshot is None:
    st.info('Enter a city and click "Search" to view weather data.')
    st.stop()

current = state.snapshot.current

# --- Current weather ---
with st.container(border=True):
    st.subheader("Current Weather")
    icon_col, temp_col, hum_col, wind_col, rain_col = st.columns([1, 2, 1, 1, 1])
    icon_col.markdown(f"# {ICONS[current.icon_category]}")
    temp_col.metric(current.location_name, f"{current.temperature_celsius}°C")
    temp_col.caption(current.condition_text)
    hum_col.metric("Humidity", f"{current.humidity_percent}%")
    wind_col.metric("Wind", f"{current.wind_speed} m/s")
    rain_col.metric("Rain", f"{current.precipitation_mm} mm")

# --- Forecast ---
with st.container(border=True):
    st.subheader("7-Day Forecast")
    if state.snapshot.forecast:
        for column, entry in zip(
            st.columns(len(state.snapshot.forecast)), state.snapshot.forecast
        ):
            with column:
                st.markdown(f"**{entry.day_label}**")
                st.markdown(f"## {ICONS[entry.icon_category]}")
                st.markdown(f"**{entry.temperature_celsius}°C**")
                st.caption(entry.condition_text)
    else:
        st.caption("No forecast available.")

# --- Advisory tabs ---
advisory_tab, irrigation_tab = st.tabs(["Crop Advisory", "Irrigation Planning"])
advisory = state.advisory

with advisory_tab:
    st.subheader("Personalized Crop Advisory")
    st.caption("AI-generated recommendations based on current weather conditions")
    if advisory is None:
        st.info("The advisory is not available right now.")
    else:
        for column, item in zip(st.columns(3), advisory.advisory):
            with column.container(border=True):
                st.markdown(f"**{item.crop}**")
                st.caption(f"Growth Stage: {item.stage}")
                st.write(item.advice)

with irrigation_tab:
    st.subheader("Irrigation Planning")
    st.caption(
        "AI-generated irrigation recommendations based on weather and soil conditions"
    )
    if advisory is None:
        st.info("The irrigation plan is not available right now.")
    else:
        moisture_col, recommendation_col = st.columns(2)
        with moisture_col.container(border=True):
            st.markdown("**Soil Moisture Status**")
            for item in advisory.irrigation.soil_moisture:
                st.progress(
                    int(item.moisture_percent),
                    text=f"{item.field} ({item.crop}): {item.moisture_percent:.0f}%",
                )
        with recommendation_col.container(border=True):
            st.markdown("**Irrigation Recommendations**")
            for item in advisory.irrigation.recommendations:
                st.markdown(f"**{item.field} ({item.crop})**")
                st.write(item.advice)
