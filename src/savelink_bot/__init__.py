"""Save-Link Bot - a Slack bot that files shared links as GitHub issues.

A `/save-link <url> [title]` slash command fetches the page, pulls out its
title and description, and opens an issue in the configured repository.

Components:
- main_socket: Socket Mode entry point
- app: wiring and start/shutdown lifecycle
- pipeline: command orchestration
- retrieval: URL fetching and metadata extraction
- tracker: GitHub issue filing
- slack: Slack command parsing and permission lookup
- mlops: optional MLflow tracing
"""
