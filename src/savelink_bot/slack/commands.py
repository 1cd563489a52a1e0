"""Slash command registration.

Binds the save-link slash command on a Bolt app to the orchestrator.
"""

from slack_bolt import App
from .parse import parse_command
from ..pipeline.run import SaveLinkOrchestrator
from ..log import get_logger

logger = get_logger("slack_commands")

def register_commands(app: App, orchestrator: SaveLinkOrchestrator, command_name: str = "/save-link") -> None:
    @app.command(command_name)
    def handle_save_link(ack, body, respond):
        """
        Acknowledge within Slack's 3 second window, then run the pipeline.
        Replies are ephemeral, visible to the requester only.
        """
        ack()

        request = parse_command(body)

        def reply(text: str) -> None:
            respond(text=text, response_type="ephemeral")

        orchestrator.handle(request, reply)

    logger.info(f"Registered {command_name}")
