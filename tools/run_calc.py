#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Allow running as "python tools/run_calc.py" (so repo root is importable)
sys.path.insert(0, str(ROOT))

from calc_core.demo_data import demo_readings  # noqa: E402
from calc_core.export_results import (  # noqa: E402
    RESULT_COLUMNS,
    build_payload,
    build_result_rows,
    summary_line,
    write_results_csv,
)
from calc_core.readings_io import load_readings  # noqa: E402
from calc_core.thermal import (  # noqa: E402
    DEFAULT_SPECIFIC_HEAT,
    DEFAULT_SURFACE_AREA,
    DUTY_POLICIES,
    DUTY_POLICY_MIN,
    WATER_SPECIFIC_HEAT_ALT,
    ExchangerConfig,
    InvalidConfigError,
    Reading,
    ThermalCalcError,
    compute,
    normalize_duty_policy,
)

logger = logging.getLogger("tools.run_calc")

_TABLE_COLUMNS = ("reading", "m_hot_kg_s", "q_kw", "lmtd_c", "u_w_m2c", "effectiveness", "status")


def _print_table(rows: list[list[str]]) -> None:
    idx = [RESULT_COLUMNS.index(col) for col in _TABLE_COLUMNS]
    table = [list(_TABLE_COLUMNS)] + [[row[i] for i in idx] for row in rows]
    widths = [max(len(r[c]) for r in table) for c in range(len(_TABLE_COLUMNS))]
    for r in table:
        print("  ".join(cell.ljust(widths[c]) for c, cell in enumerate(r)).rstrip())


def _policy_arg(value: str) -> str:
    try:
        return normalize_duty_policy(value)
    except InvalidConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _resolve_readings(args: argparse.Namespace) -> list[Reading]:
    if args.input:
        return load_readings(Path(args.input))
    if args.demo:
        return demo_readings()
    raise ValueError("Either --input or --demo must be provided")


def main() -> int:
    ap = argparse.ArgumentParser(
        description="Double-pipe heat exchanger: Q, LMTD, U and effectiveness for a batch of readings."
    )
    ap.add_argument("--input", default=None, help="Readings file (.csv with header or .json list).")
    ap.add_argument("--demo", action="store_true", help="Use the built-in three demo readings.")
    ap.add_argument(
        "--area",
        type=float,
        default=DEFAULT_SURFACE_AREA,
        help=f"Heat transfer surface area, m2 (default: {DEFAULT_SURFACE_AREA}).",
    )
    ap.add_argument(
        "--cp",
        type=float,
        default=DEFAULT_SPECIFIC_HEAT,
        help=(
            f"Fluid specific heat, J/(kg*C) (default: {DEFAULT_SPECIFIC_HEAT:g}; "
            f"{WATER_SPECIFIC_HEAT_ALT:g} for the alternative water property model)."
        ),
    )
    ap.add_argument(
        "--policy",
        type=_policy_arg,
        default=DUTY_POLICY_MIN,
        metavar="{" + ",".join(DUTY_POLICIES) + "}",
        help=(
            "Heat duty policy, case-insensitive: MIN = min(Qh, Qc), "
            "AVERAGE (or AVG, MEAN) = (Qh + Qc) / 2 (default: MIN)."
        ),
    )
    ap.add_argument("--out-json", default=None, help="Write JSON payload to this path.")
    ap.add_argument("--out-csv", default=None, help="Write results CSV to this path.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        readings = _resolve_readings(args)
        config = ExchangerConfig(
            surface_area=args.area,
            specific_heat=args.cp,
            duty_policy=args.policy,
        )
        batch = compute(readings, config)
    except ThermalCalcError as exc:
        logger.error("calculation aborted: %s: %s", exc.kind, exc)
        return 2
    except (OSError, ValueError) as exc:
        logger.error("cannot load readings: %s", exc)
        return 2

    _print_table(build_result_rows(batch))
    print(summary_line(batch))

    if args.out_json:
        out_path = Path(args.out_json)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(
            json.dumps(build_payload(batch), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        print("json:", str(out_path))
    if args.out_csv:
        print("csv:", str(write_results_csv(batch, args.out_csv)))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
