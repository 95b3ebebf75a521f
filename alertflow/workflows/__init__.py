"""
Workflows package - Pre-built workflow definitions.
"""

from alertflow.workflows.weather_alert import (
    SAMPLE_WORKFLOW_ID,
    create_weather_alert_workflow,
    register_weather_alert_workflow,
)

__all__ = [
    "SAMPLE_WORKFLOW_ID",
    "create_weather_alert_workflow",
    "register_weather_alert_workflow",
]
