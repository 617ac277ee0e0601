"""
Sentinel - Channel Scan
=======================

Summarizes suspicious signals in a window of recent channel messages.

Signals:
- attachments
- links (and how many distinct domains they point to)
- member-join system messages
- @everyone / @here mass mentions
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from sentinel.core.constants import MESSAGE_TYPE_MEMBER_JOIN


LINK_PATTERN = re.compile(r"https?://([^\s/<>]+)", re.IGNORECASE)
MASS_MENTION_PATTERN = re.compile(r"@(everyone|here)\b")


@dataclass
class ScanReport:
    window_hours: int
    messages: int = 0
    attachments: int = 0
    links: int = 0
    new_joins: int = 0
    mass_mentions: int = 0
    domains: Counter = field(default_factory=Counter)

    @property
    def suspicious(self) -> bool:
        return bool(self.attachments or self.links or self.new_joins or self.mass_mentions)

    def top_domains(self, limit: int = 3) -> List[str]:
        return [domain for domain, _ in self.domains.most_common(limit)]


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def analyze_messages(
    messages: Iterable[Dict[str, Any]],
    window_hours: int,
    now: Optional[datetime] = None,
) -> ScanReport:
    """
    Count signals in messages posted within the last `window_hours`.

    Messages without a parseable timestamp are skipped.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(hours=window_hours)
    report = ScanReport(window_hours=window_hours)

    for message in messages:
        posted_at = _parse_timestamp(message.get("timestamp"))
        if posted_at is None or posted_at < cutoff:
            continue

        report.messages += 1

        if message.get("type") == MESSAGE_TYPE_MEMBER_JOIN:
            report.new_joins += 1
            continue

        report.attachments += len(message.get("attachments") or [])

        content = message.get("content") or ""
        hosts = [host.lower() for host in LINK_PATTERN.findall(content)]
        report.links += len(hosts)
        report.domains.update(hosts)

        if message.get("mention_everyone") or MASS_MENTION_PATTERN.search(content):
            report.mass_mentions += 1

    return report


def format_report(report: ScanReport, channel_id: str) -> str:
    """Moderator-facing summary of a scan."""
    header = f"🔍 Scan of <#{channel_id}> (last {report.window_hours}h, {report.messages} messages)"

    if report.messages == 0:
        return f"{header}\nNo activity in this window."

    lines = [
        header,
        f"• Attachments: {report.attachments}",
        f"• Links: {report.links}" + (
            f" ({len(report.domains)} domains: {', '.join(report.top_domains())})"
            if report.domains else ""
        ),
        f"• New joins: {report.new_joins}",
        f"• Mass mentions: {report.mass_mentions}",
    ]
    if not report.suspicious:
        lines.append("No suspicious signals found.")
    return "\n".join(lines)


__all__ = [
    "ScanReport",
    "analyze_messages",
    "format_report",
]
