"""Wiring and lifecycle for the save-link bot.

start() connects to Slack and returns a BotHandle; shutdown() releases it.
Signal handling lives in main_socket.
"""

from dataclasses import dataclass, field
from threading import Lock
from typing import List

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler
from slack_sdk import WebClient

from .config import Settings
from .log import get_logger
from .mlops.tracing import MLflowTracer
from .pipeline.run import PipelineObserver, SaveLinkOrchestrator
from .retrieval.extract import ContentExtractor
from .retrieval.fetch import Fetcher
from .slack.client import SlackGateway
from .slack.commands import register_commands
from .tracker.github import GitHubIssueFiler

logger = get_logger("app")


@dataclass
class BotHandle:
    app: App
    handler: SocketModeHandler
    orchestrator: SaveLinkOrchestrator
    closed: bool = False
    _lock: Lock = field(default_factory=Lock, repr=False)


def build_observers(settings: Settings) -> List[PipelineObserver]:
    if not settings.MLFLOW_ENABLE_TRACING:
        return []
    return [MLflowTracer(settings.MLFLOW_TRACKING_URI, enabled=True)]


def build_orchestrator(settings: Settings, client: WebClient) -> SaveLinkOrchestrator:
    return SaveLinkOrchestrator(
        extractor=ContentExtractor(Fetcher(timeout=settings.FETCH_TIMEOUT_SECONDS)),
        filer=GitHubIssueFiler(
            token=settings.GITHUB_TOKEN,
            owner=settings.GITHUB_OWNER,
            repo=settings.GITHUB_REPO,
            api_url=settings.GITHUB_API_URL,
            labels=settings.issue_labels,
        ),
        permissions=SlackGateway(client),
        role_name=settings.AMBASSADOR_ROLE_NAME,
        observers=build_observers(settings),
    )


def start(settings: Settings) -> BotHandle:
    """Build the Bolt app, register the command and connect Socket Mode without blocking."""
    logger.info("Starting save-link bot...")
    app = App(token=settings.SLACK_BOT_TOKEN)
    orchestrator = build_orchestrator(settings, app.client)
    register_commands(app, orchestrator, settings.SAVE_LINK_COMMAND)

    handler = SocketModeHandler(app, settings.SLACK_APP_TOKEN)
    handler.connect()
    logger.info(f"✓ Connected. Listening for {settings.SAVE_LINK_COMMAND}")
    return BotHandle(app=app, handler=handler, orchestrator=orchestrator)


def shutdown(handle: BotHandle) -> None:
    """Close the Socket Mode connection. Safe to call more than once."""
    with handle._lock:
        if handle.closed:
            return
        handle.closed = True
    logger.info("Shutting down...")
    try:
        handle.handler.close()
        logger.info("Shutdown complete")
    except Exception:
        logger.exception("Error during shutdown")
