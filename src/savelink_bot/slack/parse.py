from typing import Dict, Any
from ..retrieval.url import unwrap_slack_link
from ..schemas.command import CommandRequest

def parse_command(body: Dict[str, Any]) -> CommandRequest:
    """
    Parse a slash command payload into a CommandRequest.
    Text layout is "<url> [title...]". The URL is not validated here;
    an empty or malformed one is rejected by the extractor.
    """
    text = (body.get("text") or "").strip()
    parts = text.split(None, 1)

    url = unwrap_slack_link(parts[0]) if parts else ""
    title = parts[1].strip() if len(parts) > 1 else None

    return CommandRequest(
        url=url,
        title_override=title or None,
        requester_id=body.get("user_id", ""),
        requester_name=body.get("user_name") or None,
    )
