from __future__ import annotations

from dataclasses import dataclass

from estate_trends.config import Settings
from estate_trends.controller import DashboardController


@dataclass
class PageContext:
    controller: DashboardController
    settings: Settings
