"""Client for generating crop and irrigation advisories with Google Gemini."""

import asyncio
import google.generativeai as genai
from app.config import Settings
from app.models.weather import WeatherAdvisory, WeatherSnapshot
from pydantic import ValidationError
from typing import Any, Optional
import json
import re
import logging

logger = logging.getLogger(__name__)


class GeminiClient:
    """A client to turn a weather snapshot into a structured farm advisory."""

    def __init__(self, settings: Settings, model: Optional[Any] = None):
        """Configures the Gemini API key, unless a model is handed in directly."""
        self.timeout = settings.advisory_timeout_seconds
        self.model = model
        if self.model is None and settings.google_api_key:
            genai.configure(api_key=settings.google_api_key)
            self.model = genai.GenerativeModel(settings.gemini_model)

    def build_prompt(self, snapshot: WeatherSnapshot) -> str:
        """Prompt asking for the advisory JSON for this snapshot."""
        weather_json = snapshot.model_dump_json(indent=2)
        return f"""
        You are an agronomist advising a farmer.
        Here are the current weather conditions and the upcoming forecast
        (temperatures in °C, wind in m/s, precipitation in mm):

        {weather_json}

        Based on this weather, produce crop guidance and an irrigation plan
        for the crops typically grown at {snapshot.current.location_name}.

        **JSON Output Schema:**
        - "advisory": a list of 3 objects with "crop", "stage" (growth stage) and "advice".
        - "irrigation": an object with
            - "soilMoisture": a list of objects with "field", "crop" and "moisture" (0-100).
            - "recommendations": a list of objects with "field", "crop" and "advice".

        **Example:**
        {{"advisory": [{{"crop": "Wheat", "stage": "Tillering", "advice": "Delay irrigation, rain is expected on Thursday."}}],
          "irrigation": {{"soilMoisture": [{{"field": "Field A", "crop": "Wheat", "moisture": 45}}],
                          "recommendations": [{{"field": "Field A", "crop": "Wheat", "advice": "Irrigate lightly in the early morning."}}]}}}}

        **IMPORTANT**: Respond ONLY with the JSON object, nothing else.
        """

    async def get_advisory(
        self, snapshot: WeatherSnapshot
    ) -> Optional[WeatherAdvisory]:
        """
        Ask the model for an advisory. Any failure (backend, timeout or an
        unparseable answer) is logged and yields None; it never raises.
        """
        if self.model is None:
            logger.warning("GOOGLE_API_KEY is not configured, skipping advisory")
            return None

        try:
            response = await asyncio.wait_for(
                self.model.generate_content_async(self.build_prompt(snapshot)),
                timeout=self.timeout,
            )
            # .text raises when the candidate was blocked
            text = response.text
        except asyncio.TimeoutError:
            logger.error(f"Advisory generation timed out after {self.timeout}s")
            return None
        except Exception as e:
            logger.error(f"Advisory generation failed: {e}", exc_info=True)
            return None

        return self.parse_advisory(text)

    @staticmethod
    def parse_advisory(text: Optional[str]) -> Optional[WeatherAdvisory]:
        """Extract and validate the advisory JSON object from free-form text."""
        json_text_match = re.search(r"\{.*\}", text or "", re.DOTALL)
        if not json_text_match:
            logger.warning("LLM did not return a JSON object for the advisory")
            return None

        try:
            return WeatherAdvisory.model_validate(
                json.loads(json_text_match.group(0))
            )
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"LLM advisory could not be parsed: {e}")
            return None
