from pathlib import Path
import argparse
import json
import sys

from gross_trends.adapters.base import Adapter
from gross_trends.adapters.imdb_movies import ImdbMoviesAdapter
from gross_trends.aggregator import MIN_YEAR, aggregate_gross_by_year
from gross_trends.chart import ChartLayout, render_line_chart
from gross_trends.loader import SourceUnavailable
from gross_trends.report import build_summary, format_summary, to_json_dict
from gross_trends.validator import validate


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Total movie gross revenue by year"
    )

    parser.add_argument(
        "--input",
        default="movies.csv",
        help="Movie CSV with imdb_score, title_year, director_name and gross columns"
    )

    parser.add_argument(
        "--min-year",
        type=int,
        default=MIN_YEAR,
        help="Earliest release year to include"
    )

    parser.add_argument(
        "--out",
        default="out/gross_by_year.png",
        help="Write the line chart to this path. Empty string skips rendering."
    )

    parser.add_argument(
        "--json",
        default="",
        help="Write JSON report to this path (e.g. out/report.json)."
    )

    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Chart width in pixels"
    )

    parser.add_argument(
        "--height",
        type=int,
        default=400,
        help="Chart height in pixels"
    )

    args = parser.parse_args(argv)

    try:
        args.layout = ChartLayout(width=args.width, height=args.height)
    except ValueError as exc:
        parser.error(str(exc))

    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    input_path = Path(args.input)

    adapter: Adapter = ImdbMoviesAdapter()
    try:
        loaded = adapter.load(input_path)
    except SourceUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    stats = loaded.stats
    print("Cleaning Stats")
    print("-------------")
    print(f"Rows in: {stats.rows_in}")
    print(f"Bad scores: {stats.bad_score}")
    print(f"Bad years: {stats.bad_year}")
    print(f"Bad gross values: {stats.bad_gross}")
    if stats.skipped_lines:
        print(f"Unreadable lines skipped: {len(stats.skipped_lines)}")
    if stats.missing_columns:
        print(f"Missing columns: {', '.join(stats.missing_columns)}")
    print("")

    points = aggregate_gross_by_year(loaded.records, min_year=args.min_year)
    issues = validate(loaded.records, stats, min_year=args.min_year)

    summary = build_summary(
        stats=stats,
        records_count=len(loaded.records),
        issues=issues,
        points=points
    )

    print(format_summary(summary))

    if args.out:
        _, _, saved = render_line_chart(points, args.layout, out_path=args.out, min_year=args.min_year)
        print("")
        print(f"Chart written to {saved}")

    if args.json:
        out_path = Path(args.json)
        out_path.parent.mkdir(parents=True, exist_ok=True)

        with out_path.open("w", encoding="utf-8") as f:
            json.dump(to_json_dict(summary), f, indent=2, ensure_ascii=False)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
