from pathlib import Path
from typing import List

from ghmilestones.models import RefreshResult


def render_markdown(result: RefreshResult) -> str:
    lines: List[str] = ["# Milestones", ""]

    lines.append("## Summary")
    lines.append("")
    lines.append(f"- **Open**: {result.open_count}")
    lines.append(f"- **Closed**: {result.closed_count}")
    lines.append("")

    lines.append("## Milestones")
    lines.append("")
    if not result.milestones:
        lines.append("No milestones found.")
        lines.append("")
        return "\n".join(lines)

    for milestone in result.milestones:
        state = "open" if milestone.is_open else "closed"
        meta = milestone.due_date
        if milestone.updated_at:
            meta += f" Last updated {milestone.updated_at}."
        lines.append(f"- [{milestone.repo} - {milestone.name}]({milestone.url}) ({state})")
        lines.append(
            f"  {meta} {milestone.complete_msg} complete, "
            f"{milestone.open_issues} open, {milestone.closed_issues} closed"
        )
    lines.append("")
    return "\n".join(lines)


def write_report(content: str, report_path: Path) -> Path:
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(content)
    return report_path
