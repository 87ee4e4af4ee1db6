"""
Toggl MCP Server

Exposes Toggl Track time entries, projects and running timers as MCP tools,
including weekly summaries with daily and per-project breakdowns.
"""

__version__ = "0.1.0"
