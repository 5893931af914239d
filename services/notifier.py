import json
import logging

from core.acl import key_owner
from core.models import TriggerRecord
from services.github_service import create_issue_comment

logger = logging.getLogger("autorepo_worker.notifier")

def _value(value) -> str:
    return "null" if value is None else str(value)

def render_comment(trigger: TriggerRecord) -> str:
    """Render the Markdown comment the build workflow picks up."""
    lines = [
        f"Build triggered by **_{key_owner(trigger.key_owner)}_**'s key for "
        f"[{trigger.code_repo}]({trigger.code_url}):{trigger.code_branch}"
        f"{' (private)' if trigger.code_private else ''}.",
        "",
        f"- **Target Name**: `{trigger.target_name}`",
        f"- **Target Repository**: `{trigger.target_repo}`",
        f"- **Main Branch**: `{_value(trigger.branch_main)}`",
    ]
    if trigger.branch_test is not None:
        lines.append(f"- **Test Branch**: `{trigger.branch_test}`")

    raw = json.dumps(trigger.to_dict(), indent=4)
    return (
        "\n".join(lines)
        + "\n\n\n\n<details><summary>Raw Trigger Data</summary>"
        + f"\n\n\n```json\n{raw}\n```\n\n</details>"
        + f"\n\n> (worker version: <kbd>{trigger.worker_version}</kbd>)"
    )

async def notify(trigger: TriggerRecord) -> str:
    """Post the trigger comment and return its URL."""
    comment = await create_issue_comment(render_comment(trigger))
    comment_url = comment.get("html_url")
    logger.info(f"Trigger comment created: {comment_url}")
    return comment_url
