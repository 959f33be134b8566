from __future__ import annotations

import json
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import pytest

from gross_trends.adapters.base import MovieCleanStats
from gross_trends.aggregator import AggregatedPoint
from gross_trends.chart import (
    ChartLayout,
    Margin,
    format_billions,
    format_year,
    render_line_chart,
)
from gross_trends.main import main
from gross_trends.report import build_summary, format_summary, to_json_dict
from gross_trends.validator import Issue


# -----------------------------
# Helpers
# -----------------------------

def _points():
    return [
        AggregatedPoint(2010, 1_000_000_000.0),
        AggregatedPoint(2011, 1_500_000_000.0),
        AggregatedPoint(2013, 2_500_000_000.0),
    ]


def _stats(**overrides) -> MovieCleanStats:
    base = dict(rows_in=4, bad_score=0, bad_year=1, bad_gross=1, missing_columns=())
    base.update(overrides)
    return MovieCleanStats(**base)


@pytest.fixture
def movies_csv(tmp_path) -> Path:
    p = tmp_path / "movies.csv"
    p.write_text(
        "director_name,gross,title_year,imdb_score\n"
        "A,100000000,2010,7.0\n"
        "B,50000000,2010,6.5\n"
        "C,999000000,2009,8.0\n"
        "D,,2012,5.0\n"
        "E,200000000,2012,7.5\n",
        encoding="utf-8",
    )
    return p


# -----------------------------
# Report
# -----------------------------

def test_json_report_shape():
    issue = Issue(category="parsing", message="Rows with non-numeric gross", count=1,
                  examples=[{"director": "D"}])
    summary = build_summary(_stats(), records_count=4, issues=[issue], points=_points())
    out = to_json_dict(summary)

    assert out["counts"] == {"rows": 4, "records": 4, "points": 3}
    assert out["cleaning"]["bad_gross"] == 1
    assert out["cleaning"]["missing_columns"] == []
    assert out["cleaning"]["skipped_lines"] == 0
    assert out["issues"][0]["count"] == 1
    assert out["points"][0] == {"year": 2010, "totalGross": 1_000_000_000.0}
    assert [p["year"] for p in out["points"]] == [2010, 2011, 2013]


def test_format_summary_lists_years_in_billions():
    summary = build_summary(_stats(), records_count=4, issues=[], points=_points())
    text = format_summary(summary)

    assert "Data issues:\n- none" in text
    assert "- 2011: 1.50B" in text
    assert "All years: 5.00B" in text


def test_format_summary_without_points():
    summary = build_summary(_stats(rows_in=0), records_count=0, issues=[], points=[])
    assert "- no qualifying rows" in format_summary(summary)


# -----------------------------
# Chart
# -----------------------------

def test_default_layout_matches_chart_margins():
    layout = ChartLayout()
    assert layout.margin == Margin(top=50, right=30, bottom=60, left=70)
    assert layout.inner_width == 700
    assert layout.inner_height == 290
    assert layout.figsize == (8.0, 4.0)


def test_layout_without_plot_area_is_rejected():
    with pytest.raises(ValueError):
        ChartLayout(width=90, height=400)


@pytest.mark.parametrize("value, expected", [
    (0, "0B"),
    (500_000_000, "0.5B"),
    (1_000_000_000, "1B"),
    (2_500_000_000, "2.5B"),
])
def test_format_billions(value, expected):
    assert format_billions(value) == expected


def test_format_year_has_no_separator_or_decimals():
    assert format_year(2012.0) == "2012"


def test_render_line_chart_domains_and_labels(tmp_path):
    out = tmp_path / "nested" / "chart.png"
    fig, ax, saved = render_line_chart(_points(), out_path=str(out))

    assert saved == str(out)
    assert out.exists() and out.stat().st_size > 0

    assert ax.get_xlim() == (2010.0, 2013.0)
    assert ax.get_ylim() == (0.0, 2_500_000_000.0)
    assert ax.get_title() == "Trends in Gross Movie Revenue Over Time"
    assert ax.get_xlabel() == "Year"
    assert ax.get_ylabel() == "Total Gross (Billion $)"

    line = ax.get_lines()[0]
    assert list(line.get_xdata()) == [2010, 2011, 2013]
    assert line.get_color() == "steelblue"
    assert line.get_linewidth() == 2


def test_render_line_chart_uses_layout_size():
    layout = ChartLayout(width=1000, height=500)
    fig, _, saved = render_line_chart(_points(), layout)

    assert saved is None
    assert tuple(fig.get_size_inches()) == (10.0, 5.0)


def test_render_line_chart_handles_empty_points():
    _, ax, _ = render_line_chart([])
    assert ax.get_lines()[0].get_xdata().size == 0
    assert ax.get_title() == "Trends in Gross Movie Revenue Over Time"


# -----------------------------
# CLI
# -----------------------------

def test_cli_writes_chart_and_json(movies_csv, tmp_path, capsys):
    chart = tmp_path / "out" / "chart.png"
    report = tmp_path / "out" / "report.json"

    code = main(["--input", str(movies_csv), "--out", str(chart), "--json", str(report)])

    assert code == 0
    assert chart.exists()

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["points"] == [
        {"year": 2010, "totalGross": 150000000.0},
        {"year": 2012, "totalGross": 200000000.0},
    ]
    assert data["counts"]["rows"] == 5

    stdout = capsys.readouterr().out
    assert "Bad gross values: 1" in stdout
    assert "Chart written to" in stdout


def test_cli_can_skip_rendering(movies_csv, tmp_path, capsys):
    assert main(["--input", str(movies_csv), "--out", ""]) == 0
    assert "Chart written to" not in capsys.readouterr().out


def test_cli_unreadable_source_exits_without_output(tmp_path, capsys):
    chart = tmp_path / "chart.png"
    report = tmp_path / "report.json"

    code = main(["--input", str(tmp_path / "missing.csv"),
                 "--out", str(chart), "--json", str(report)])

    assert code == 1
    assert not chart.exists()
    assert not report.exists()
    assert "error: Cannot read" in capsys.readouterr().err


def test_cli_rejects_chart_without_plot_area(movies_csv, tmp_path, capsys):
    report = tmp_path / "report.json"

    with pytest.raises(SystemExit) as excinfo:
        main(["--input", str(movies_csv), "--width", "50", "--json", str(report)])

    assert excinfo.value.code == 2
    assert not report.exists()
    captured = capsys.readouterr()
    assert "leaves no room" in captured.err
    assert "Cleaning Stats" not in captured.out
