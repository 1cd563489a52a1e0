"""GitHub issue body formatting.

Renders an IssueRecord as the Markdown body of the issue.
"""

from __future__ import annotations

from savelink_bot.schemas.command import IssueRecord


def render_issue_body(record: IssueRecord) -> str:
    """
    Body layout:
      - **URL:** link
      - **Description:** page description
      - submitter footer
    """
    sections = [
        f"**URL:** {record.url}",
        f"**Description:**\n{record.description}",
        "---",
        f"_Submitted by {record.submitted_by} via /save-link_",
    ]
    return "\n\n".join(sections)
