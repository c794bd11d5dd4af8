"""API client and view state behind the dashboard page.

The page itself only renders a :class:`DashboardState`; every network call
goes through :class:`DashboardClient`.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed  # explicit join over the three fetches
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from server.logger import get_logger

log = get_logger(name='SimpleWebAppUI', log_file='dashboard.log')

# API base URL: STREAMLIT_API_BASE (set by the deployment) or the local API default
API_BASE = os.getenv('STREAMLIT_API_BASE', 'http://127.0.0.1:3000')

INITIAL_MESSAGE = 'Loading...'
UNAVAILABLE_MESSAGE = 'Backend unavailable'
UNREACHABLE_ERROR = 'Could not reach backend API'

# (state slot, path) pairs fetched on every refresh
DASHBOARD_ENDPOINTS: Tuple[Tuple[str, str], ...] = (
    ('hello', '/hello'),
    ('stats', '/stats'),
    ('health', '/health'),
)


def _read_timeout() -> Optional[float]:
    raw = os.getenv('API_TIMEOUT_SEC')
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        log.warning(f'Ignoring invalid API_TIMEOUT_SEC value {raw!r}')
        return None
    return value if value > 0 else None


@dataclass
class DashboardState:
    message: str = INITIAL_MESSAGE
    stats: Optional[Dict[str, Any]] = None
    health: Optional[Dict[str, Any]] = None
    loading: bool = True
    error: Optional[str] = None

    def begin(self) -> None:
        self.loading = True
        self.error = None

    @property
    def refresh_enabled(self) -> bool:
        return not self.loading

    def result_box_class(self) -> str:
        if self.loading:
            return 'result-box loading'
        if self.error:
            return 'result-box error'
        return 'result-box success'

    def result_text(self) -> str:
        if self.loading:
            return 'Loading...'
        return self.error or self.message

    def refresh_label(self) -> str:
        return 'Refreshing...' if self.loading else 'Refresh Data'

    def stat_cards(self) -> List[Tuple[str, Any]]:
        """(label, value) pairs taken verbatim from the last /stats payload."""
        if not self.stats:
            return []
        return [
            ('API Requests', self.stats.get('requests')),
            ('Uptime (seconds)', self.stats.get('uptime')),
            ('Last Updated', self.stats.get('timestamp')),
        ]

    def health_cards(self) -> List[Tuple[str, Any]]:
        if not self.health:
            return []
        return [
            ('System Status', self.health.get('status')),
            ('Environment', self.health.get('environment')),
        ]

    @property
    def is_healthy(self) -> bool:
        return bool(self.health) and self.health.get('status') == 'healthy'


class DashboardClient:
    """Fetch the dashboard resources from the API service.

    ``session`` may be any object with a requests-style ``get(url, timeout=...)``
    returning a response with ``raise_for_status()`` and ``json()``.
    """

    def __init__(self, base_url: str = API_BASE, session=None, timeout: Optional[float] = None):
        if not base_url:
            raise ValueError('API base URL is not set')
        self.base_url = base_url.rstrip('/')
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> 'DashboardClient':
        return cls(base_url=API_BASE, timeout=_read_timeout())

    def url_for(self, path: str) -> str:
        return self.base_url + '/' + path.lstrip('/')

    def get_json(self, path: str) -> Dict[str, Any]:
        """GET *path* and decode the JSON body; raises on network, status or decode errors."""
        resp = self.session.get(self.url_for(path), timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f'Unexpected payload from {path}: {type(data).__name__}')
        return data

    def fetch(self, path: str):
        try:
            return self.get_json(path), None
        except Exception as exc:
            return None, exc

    def refresh(self, state: DashboardState) -> DashboardState:
        """Reload hello/stats/health into *state*.

        All three requests run concurrently and are joined before ``loading``
        is cleared. Slots whose request failed keep their previous value.
        """
        state.begin()
        failures: Dict[str, Exception] = {}
        try:
            with ThreadPoolExecutor(max_workers=len(DASHBOARD_ENDPOINTS)) as executor:
                futures = {executor.submit(self.fetch, path): slot for slot, path in DASHBOARD_ENDPOINTS}
                for fut in as_completed(futures):
                    slot = futures[fut]
                    payload, exc = fut.result()
                    if exc is not None:
                        failures[slot] = exc
                        continue
                    self._apply(state, slot, payload)
            if failures:
                for slot, exc in failures.items():
                    log.error(f'Failed to fetch {slot}: {exc}')
                state.error = UNREACHABLE_ERROR
                state.message = UNAVAILABLE_MESSAGE
        finally:
            state.loading = False
        return state

    @staticmethod
    def _apply(state: DashboardState, slot: str, payload: Dict[str, Any]) -> None:
        if slot == 'hello':
            message = payload.get('message')
            state.message = message if isinstance(message, str) else ''
        elif slot == 'stats':
            state.stats = payload
        elif slot == 'health':
            state.health = payload
