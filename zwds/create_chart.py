"""
Chart creation library.
Computes a Zi Wei Dou Shu chart from birth data and writes chart_data JSON.

The birth hour is either given directly (clock hour or branch label) or
derived from clock time + coordinates through LMT correction.

Usage from Python:
    from zwds.create_chart import compute_and_save_chart
    compute_and_save_chart(
        name="Alex", birth_date="1990-01-01", gender="M", hour=0,
    )
    compute_and_save_chart(
        name="Alex", birth_date="1990-01-01", gender="M",
        birth_time="10:30", latitude=25.033, longitude=121.565,
    )
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union

from zwds.activation import activation_for_year
from zwds.birth import BirthInput
from zwds.birth_time import local_mean_time
from zwds.chart import ChartData, compute_chart
from zwds.config import get_settings
from zwds.errors import InvalidBirthInputError
from zwds.health import analyze_health
from zwds.transformations import opposite_influences, self_transformations


logger = logging.getLogger(__name__)


def birth_input_for(name: str, birth_date: Union[str, date], gender: str,
                    hour: Union[int, str, None] = None, birth_time: Optional[str] = None,
                    latitude: Optional[float] = None, longitude: Optional[float] = None,
                    utc_offset: Optional[float] = None) -> tuple[BirthInput, Optional[dict]]:
    """
    Build the BirthInput, applying LMT correction when a clock time is given.

    Returns:
        (birth_input, lmt_info); lmt_info is None when `hour` was given directly
    """
    if isinstance(birth_date, str):
        try:
            birth_date = datetime.strptime(birth_date, "%Y-%m-%d").date()
        except ValueError:
            raise InvalidBirthInputError(f"Birth date must be YYYY-MM-DD, got {birth_date!r}") from None

    if hour is not None:
        return BirthInput(birth_date.year, birth_date.month, birth_date.day, hour, gender, name), None

    if birth_time is None:
        raise InvalidBirthInputError("Either hour or birth_time is required")
    if longitude is None:
        # No coordinates: the clock hour is used as-is
        hour_part = birth_time.split(":")[0]
        return BirthInput(birth_date.year, birth_date.month, birth_date.day,
                          hour_part, gender, name), None

    lmt_info = local_mean_time(birth_date, birth_time, longitude, latitude, utc_offset)
    lmt = lmt_info["lmt"]
    birth = BirthInput(lmt.year, lmt.month, lmt.day, lmt.hour, gender, name)
    return birth, lmt_info


def chart_payload(chart: ChartData, year: Optional[int] = None) -> dict:
    """Chart plus its yearly activation, health hints and transformation overlays."""
    year = year or date.today().year
    return {
        "chart": chart.to_dict(),
        "activation": activation_for_year(chart, year).to_dict(),
        "health": analyze_health(chart).to_dict(),
        "self_transformations": self_transformations(chart),
        "opposite_influences": opposite_influences(chart),
    }


def _chart_dir(chart_dir: Union[str, Path, None]) -> Path:
    return Path(chart_dir if chart_dir is not None else get_settings().chart_dir)


def _chart_path(name: str, chart_dir: Union[str, Path, None]) -> Path:
    filename = name.lower().replace(" ", "_")
    return _chart_dir(chart_dir) / f"{filename}.json"


def compute_and_save_chart(name: str, birth_date: Union[str, date], gender: str,
                           hour: Union[int, str, None] = None, birth_time: Optional[str] = None,
                           latitude: Optional[float] = None, longitude: Optional[float] = None,
                           utc_offset: Optional[float] = None,
                           chart_dir: Union[str, Path, None] = None) -> dict:
    """
    Compute a chart and save it to <chart_dir>/<name>.json.

    Args:
        name: user's name (used as filename)
        birth_date: "YYYY-MM-DD" or date
        gender: "M"/"F" or "male"/"female"
        hour: clock hour 0-23 or branch label; takes precedence over birth_time
        birth_time: "HH:MM" local clock time
        latitude, longitude: birth place, for LMT correction
        utc_offset: manual standard offset, overrides timezone detection
        chart_dir: output directory (default: settings.chart_dir)

    Returns:
        dict with keys: path, lunar_date, five_element, life_palace, lmt
    """
    birth, lmt_info = birth_input_for(name, birth_date, gender, hour, birth_time,
                                      latitude, longitude, utc_offset)
    chart = compute_chart(birth)

    user = {
        "name": name,
        "birth": birth.to_dict(),
        "birth_time_clock": birth_time,
        "location": {"latitude": latitude, "longitude": longitude},
    }
    if lmt_info:
        user["birth_time_lmt"] = lmt_info["lmt"].strftime("%Y-%m-%d %H:%M")
        user["lmt_correction_minutes"] = lmt_info["lmt_correction_minutes"]
        user["timezone"] = lmt_info["timezone"]
        user["dst_detected"] = lmt_info["dst_detected"]

    chart_data = {"user": user, "ziwei": chart.to_dict()}

    chart_path = _chart_path(name, chart_dir)
    chart_path.parent.mkdir(parents=True, exist_ok=True)
    with open(chart_path, "w", encoding="utf-8") as f:
        json.dump(chart_data, f, indent=2, ensure_ascii=False)
    logger.info("Saved chart for %s to %s", name, chart_path)

    life = chart.life_palace
    return {
        "path": str(chart_path),
        "lunar_date": chart.lunar_date,
        "five_element": chart.five_element,
        "life_palace": f"{life.label} {', '.join(life.star_names) or '(empty)'}",
        "lmt": user.get("birth_time_lmt"),
    }


def load_user_chart(name: str, chart_dir: Union[str, Path, None] = None) -> dict:
    """Load a saved chart JSON file."""
    chart_path = _chart_path(name, chart_dir)
    if not chart_path.exists():
        raise FileNotFoundError(f"No chart data found for user '{name}' at {chart_path}")
    with open(chart_path, encoding="utf-8") as f:
        return json.load(f)


def chart_from_saved(saved: dict, as_of: Optional[date] = None) -> ChartData:
    """Recompute a ChartData from the birth section of a saved chart."""
    return compute_chart(BirthInput.from_dict(saved["user"]["birth"]), as_of=as_of)
