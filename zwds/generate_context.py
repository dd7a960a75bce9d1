"""
Generate reading context for a user in a given year.

Loads the saved chart, recomputes it from the stored birth input and
produces a single JSON payload: the year's activation, the Da Xian
decade in force, health hints and the transformation overlays.

Usage:
    python -m zwds.generate_context --user alex --year 2026
    python -m zwds.generate_context --user alex --year 2026 --span 3
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Union

from zwds.activation import activation_for_year
from zwds.config import configure_logging
from zwds.create_chart import chart_from_saved, load_user_chart
from zwds.health import analyze_health
from zwds.transformations import opposite_influences, self_transformations


logger = logging.getLogger(__name__)


def generate_reading_context(user_name: str, target_year: int, span: int = 1,
                             chart_dir: Union[str, Path, None] = None,
                             as_of: Optional[date] = None) -> dict:
    """
    Complete context payload for a reading.

    Args:
        user_name: saved chart name
        target_year: first year of the reading
        span: number of consecutive years to include
        chart_dir: where the chart was saved (default from settings)
        as_of: date used for the age in the chart header
    """
    if span < 1:
        raise ValueError(f"span must be at least 1, got {span}")

    saved = load_user_chart(user_name, chart_dir)
    chart = chart_from_saved(saved, as_of=as_of)
    years = [activation_for_year(chart, target_year + i) for i in range(span)]
    current = years[0]

    return {
        "user": saved["user"],
        "chart_summary": {
            "lunar_date": chart.lunar_date,
            "zodiac": chart.zodiac,
            "five_element": chart.five_element,
            "yin_yang_gender": chart.yin_yang_gender,
            "life_palace": chart.life_palace.to_dict(),
            "body_palace": chart.body_palace.name.chinese,
        },
        "target_year": target_year,
        "current_decade": current.decade_palace.to_dict() if current.decade_palace else None,
        "years": [record.to_dict() for record in years],
        "health": analyze_health(chart).to_dict(),
        "self_transformations": self_transformations(chart),
        "opposite_influences": opposite_influences(chart),
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate Zi Wei reading context for a saved chart.")
    parser.add_argument("--user", required=True)
    parser.add_argument("--year", type=int, default=date.today().year)
    parser.add_argument("--span", type=int, default=1)
    parser.add_argument("--chart-dir", dest="chart_dir", default=None)
    parser.add_argument("--log-level", dest="log_level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    # ZwdsError is a ValueError; span checks raise plain ValueError
    try:
        context = generate_reading_context(args.user, args.year, args.span, args.chart_dir)
    except (ValueError, FileNotFoundError) as e:
        logger.debug("Reading context failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(context, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
