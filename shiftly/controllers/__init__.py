"""
Screen-state controllers.
Each owns one screen's fetched data, loading/error flags and refresh lifecycle.
"""
from shiftly.controllers.base import LoadState, ScreenController
from shiftly.controllers.conversation_detail import ConversationDetailController
from shiftly.controllers.conversations import ConversationsListController
from shiftly.controllers.dashboard import DashboardController
from shiftly.controllers.escalations import EscalationsController
from shiftly.controllers.leads import LeadFilter, LeadsController
from shiftly.controllers.settings import SettingsController

__all__ = [
    "LoadState",
    "ScreenController",
    "ConversationDetailController",
    "ConversationsListController",
    "DashboardController",
    "EscalationsController",
    "LeadFilter",
    "LeadsController",
    "SettingsController",
]
