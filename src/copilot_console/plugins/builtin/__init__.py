"""
Built-in plugins for Copilot Console

This package contains the plugins that are offered to the model
out-of-the-box.
"""

from .doctor import DoctorPlugin
from .image import ImagePlugin
from .news import NewsPlugin
from .parking import ParkingRegistrationPlugin
from .weather import WeatherPlugin
from .workflows import WorkflowAutomationPlugin, WorkflowStatusPlugin

# Register all built-in plugins
BUILTIN_PLUGINS = [
    ImagePlugin,
    WorkflowStatusPlugin,
    WorkflowAutomationPlugin,
    ParkingRegistrationPlugin,
    NewsPlugin,
    WeatherPlugin,
    DoctorPlugin,
]

__all__ = [
    "DoctorPlugin",
    "ImagePlugin",
    "NewsPlugin",
    "ParkingRegistrationPlugin",
    "WeatherPlugin",
    "WorkflowAutomationPlugin",
    "WorkflowStatusPlugin",
    "BUILTIN_PLUGINS",
]
