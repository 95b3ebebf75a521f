"""
AlertFlow - A small workflow engine for weather alert pipelines.

Define a graph of form, integration, condition and email nodes, then
execute it against runtime inputs to get a step-by-step trace.
"""

__version__ = "1.0.0"
