"""Render the pull request comment for a comparison."""

from .models import CommentPayload

HEADER = "Comparison result:"
INDENT = "    "


def render_comment(payload: CommentPayload) -> str:
    """Format the comment body.

    One line per count in fixed order, then optional short description and
    report link lines. No trailing newline.
    """
    counts = payload.counts
    lines = [
        HEADER,
        f"{INDENT}- Failed items: {counts.failed}",
        f"{INDENT}- New items: {counts.new}",
        f"{INDENT}- Deleted items: {counts.deleted}",
        f"{INDENT}- Passed items: {counts.passed}",
    ]
    if payload.short_description:
        lines.append(f"{INDENT}- Short descriptions enabled")
    if payload.report_url:
        lines.append(f"{INDENT}- [Report URL]({payload.report_url})")
    return "\n".join(lines)
