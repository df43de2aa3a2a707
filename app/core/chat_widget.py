"""Kommunicate chatbot widget, injected once per session."""

import json
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

KOMMUNICATE_SCRIPT_URL = "https://widget.kommunicate.io/v2/kommunicate.app"

# Runs inside a Streamlit component iframe and writes into the parent page,
# so the widget outlives the iframe. Skips if the page already has it.
_LOADER_TEMPLATE = """
<script type="text/javascript">
(function (w, d) {{
  if (w.kommunicate) return;
  var m = {{}};
  m._globals = {settings};
  w.kommunicate = m;
  var s = d.createElement("script");
  s.type = "text/javascript";
  s.async = true;
  s.src = {src};
  d.getElementsByTagName("head")[0].appendChild(s);
}})(window.parent || window, (window.parent || window).document);
</script>
"""


class ChatWidget:
    """Renders the widget loader and guards against double injection."""

    def __init__(self, app_id: Optional[str]):
        self.app_id = app_id
        self._loaded = False

    @property
    def enabled(self) -> bool:
        return bool(self.app_id)

    @property
    def loaded(self) -> bool:
        return self._loaded

    def render_snippet(self) -> str:
        """HTML that loads the Kommunicate script with this app id."""
        settings = {
            "appId": self.app_id,
            "popupWidget": True,
            "automaticChatOpenOnNavigation": True,
        }
        return _LOADER_TEMPLATE.format(
            settings=json.dumps(settings), src=json.dumps(KOMMUNICATE_SCRIPT_URL)
        )

    def load(self, inject: Callable[[str], object]) -> bool:
        """
        Hand the snippet to `inject` (e.g. streamlit.components.v1.html).
        Runs at most once; returns True only on the call that injected.
        """
        if self._loaded:
            return False
        if not self.enabled:
            logger.info("KOMMUNICATE_APP_ID not set, chatbot widget disabled")
            return False
        inject(self.render_snippet())
        self._loaded = True
        logger.info("Chatbot widget injected")
        return True
