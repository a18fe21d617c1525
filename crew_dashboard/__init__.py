"""Crew Dashboard API: agents, tasks, templates, executions and files, plus request performance metrics."""

__version__ = "0.1.0"
