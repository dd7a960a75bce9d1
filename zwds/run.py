"""
CLI for chart computation.

Usage:
    zwds --name NAME --birth-date YYYY-MM-DD --hour H --gender M
    zwds --name NAME --birth-date YYYY-MM-DD --birth-time HH:MM \
        --latitude LAT --longitude LON --gender female [--utc-offset OFFSET] \
        [--year YEAR] [--compass] [--save]
"""

import argparse
import json
import logging
import sys

from zwds.activation import destiny_compass
from zwds.chart import compute_chart
from zwds.config import configure_logging
from zwds.create_chart import birth_input_for, chart_payload, compute_and_save_chart
from zwds.errors import ZwdsError


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute a Zi Wei Dou Shu chart.")
    parser.add_argument("--name", default="")
    parser.add_argument("--birth-date", required=True, dest="birth_date")
    when = parser.add_mutually_exclusive_group(required=True)
    when.add_argument("--hour", help="clock hour 0-23 or branch label (子, Zi, ...)")
    when.add_argument("--birth-time", dest="birth_time", help="HH:MM local clock time")
    parser.add_argument("--latitude", type=float, default=None)
    parser.add_argument("--longitude", type=float, default=None)
    parser.add_argument("--utc-offset", dest="utc_offset", type=float, default=None)
    parser.add_argument("--gender", required=True, choices=["M", "F", "male", "female"])
    parser.add_argument("--year", type=int, default=None, help="year for the activation section")
    parser.add_argument("--compass", action="store_true", help="include the destiny compass")
    parser.add_argument("--save", action="store_true", help="also write chart_data/<name>.json")
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        birth, _ = birth_input_for(
            name=args.name,
            birth_date=args.birth_date,
            gender=args.gender,
            hour=args.hour,
            birth_time=args.birth_time,
            latitude=args.latitude,
            longitude=args.longitude,
            utc_offset=args.utc_offset,
        )
        chart = compute_chart(birth)
        result = chart_payload(chart, args.year)
        if args.compass:
            result["destiny_compass"] = [r.to_dict() for r in destiny_compass(chart)]
        if args.save:
            if not args.name:
                raise ZwdsError("--save needs --name")
            result["saved"] = compute_and_save_chart(
                name=args.name,
                birth_date=args.birth_date,
                gender=args.gender,
                hour=args.hour,
                birth_time=args.birth_time,
                latitude=args.latitude,
                longitude=args.longitude,
                utc_offset=args.utc_offset,
            )
    except ZwdsError as e:
        logger.debug("Chart computation failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
