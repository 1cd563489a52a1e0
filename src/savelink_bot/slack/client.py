from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception
from ..errors import BotFailure, FailureKind
from ..log import get_logger

logger = get_logger("slack_client")


def _is_rate_limited(exc: BaseException) -> bool:
    return isinstance(exc, SlackApiError) and exc.response.get("error") == "ratelimited"


class SlackGateway:
    """Permission lookups against Slack user groups."""

    def __init__(self, client: WebClient):
        self.client = client

    @retry(
        retry=retry_if_exception(_is_rate_limited),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True
    )
    def list_usergroups(self):
        """
        Lists user groups with their members.
        Requires 'usergroups:read' scope. Read-only, so safe to retry.
        """
        try:
            response = self.client.usergroups_list(include_users=True)
            return response["usergroups"]
        except SlackApiError as e:
            if e.response.get("error") == "ratelimited":
                logger.warning("Slack rate limited, retrying...")
            else:
                logger.error(f"Error listing user groups: {e.response.get('error')}")
            raise

    def has_role(self, user_id: str, role_name: str) -> bool:
        """
        True when the user belongs to the user group whose handle or name is role_name.
        A failed lookup is raised as a short UNKNOWN BotFailure, safe to show the requester.
        """
        try:
            groups = self.list_usergroups()
        except SlackApiError as e:
            raise BotFailure(
                FailureKind.UNKNOWN,
                f"Could not verify permissions: {e.response.get('error')}",
                cause=e,
            ) from e

        wanted = role_name.strip().lstrip("@").lower()
        for group in groups:
            names = {(group.get("handle") or "").lower(), (group.get("name") or "").lower()}
            if wanted in names:
                return user_id in (group.get("users") or [])
        logger.warning(f"No Slack user group named '{role_name}'")
        return False
