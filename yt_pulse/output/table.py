from __future__ import annotations

from typing import List, Optional

from yt_pulse.categories import category_name
from yt_pulse.models import EnrichedVideo, GradeCounts, TrendAnalysis


class TablePrinter:
    def print(self, videos: List[EnrichedVideo], counts: Optional[GradeCounts] = None) -> None:
        if counts is not None:
            print(
                f"all ({counts.total})  excellent ({counts.excellent})  "
                f"good ({counts.good})  needs-improvement ({counts.needs_improvement})"
            )
            print()

        if not videos:
            print("No results.")
            return

        rows = []
        for i, v in enumerate(videos, start=1):
            rows.append(
                [
                    str(i),
                    (v.published_at or "")[:10],
                    _truncate(v.channel_title, 24),
                    _truncate(v.title, 50),
                    category_name(v.video.category_id),
                    format_count(v.subscriber_count),
                    format_count(v.view_count),
                    f"{v.vs_ratio:.2f}x",
                    v.grade,
                ]
            )

        headers = ["#", "published", "channel", "title", "category", "subs", "views", "v/s", "grade"]
        _print_table(headers, rows)


class AnalysisPrinter:
    def print(self, analysis: TrendAnalysis) -> None:
        print("\n=== Trend summary")
        print(analysis.summary)
        if analysis.key_themes:
            print("\nKey themes:")
            for i, t in enumerate(analysis.key_themes, start=1):
                print(f"  {i}. {t.theme}: {t.explanation}")
        print("\nAudience insights:")
        print(analysis.audience_insights)
        print("\nPrediction:")
        print(analysis.prediction)


def format_count(n: int) -> str:
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def _truncate(text: str, max_len: int) -> str:
    t = (text or "").strip()
    if len(t) <= max_len:
        return t
    return t[: max_len - 1] + "…"


def _print_table(headers: List[str], rows: List[List[str]]) -> None:
    # basic table printer (no deps)
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt_row(row):
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))

    print(fmt_row(headers))
    print("-+-".join("-" * w for w in widths))
    for row in rows:
        print(fmt_row(row))
