"""Dashboard statistics panel."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..services.dashboard_service import DashboardService
from .base import Controller, ViewState


logger = logging.getLogger(__name__)

STAT_KEYS = ("totalUsers", "todayRegistrations", "totalProducts", "todayProducts")


class Dashboard(Controller):
    def __init__(self, service: DashboardService) -> None:
        super().__init__()
        self.service = service
        self.stats: Dict[str, Any] = {key: 0 for key in STAT_KEYS}
        self.state = ViewState.IDLE
        self.error: Optional[str] = None

    def load(self) -> ViewState:
        generation = self._begin()
        self.state = ViewState.LOADING
        result = self.service.get_stats()
        if not self._is_current(generation):
            return self.state
        if not result.ok:
            logger.error("Error fetching dashboard stats: %s", result.error)
            self.error = "Failed to load dashboard statistics"
            self.state = ViewState.ERRORED
            return self.state
        if isinstance(result.data, dict):
            self.stats.update(result.data)
        self.error = None
        self.state = ViewState.LOADED
        return self.state

    def to_dict(self) -> Dict[str, Any]:
        return {"state": self.state.value, "stats": self.stats, "error": self.error}
