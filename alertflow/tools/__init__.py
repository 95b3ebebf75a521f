"""
Tools package - External data sources used by workflow nodes.
"""

from alertflow.tools.weather import WeatherLookup

__all__ = [
    "WeatherLookup",
]
