"""CLI entrypoint for the property solar insights form."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from solar_insights.common.config_loader import load_settings
from solar_insights.common.constants import (
    DEFAULT_ADDRESS,
    EXIT_HARD_FAIL,
    EXIT_SUBMISSION_FAILED,
    EXIT_SUCCESS,
    MODES,
)
from solar_insights.common.errors import PipelineError
from solar_insights.common.http import HttpClient
from solar_insights.common.ids import generate_run_id
from solar_insights.common.logging import build_logger, log_event
from solar_insights.common.models import PipelineOutcome
from solar_insights.pipeline.runner import AddressInsightsPipeline
from solar_insights.pipeline.state import PipelineState, begin_submission, dismiss_error, finish_submission

QUIT_WORDS = {"quit", "exit"}
DISMISS_WORD = "dismiss"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", nargs="?", default="analyze", choices=["analyze", "interactive"])
    parser.add_argument("--address", default=DEFAULT_ADDRESS)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--mode", default=None, choices=MODES)
    parser.add_argument("--skip-credential-check", action="store_true")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-dir", default=None)
    return parser.parse_args(argv)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.2f}"


def render_state(state: PipelineState) -> str:
    lines: list[str] = []
    if state.error:
        lines.append(f"[Error] {state.error}")
    if state.map_url:
        lines.append(f"Property Satellite View: {state.map_url}")
    if state.solar_data is not None:
        data = state.solar_data
        lines.extend(
            [
                "Solar Potential Analysis",
                f"  Address: {data.address}",
                f"  Yearly Generation: {_format_number(data.yearly_generation_kwh)} kWh",
                f"  20-Year Savings: ${data.potential_savings_usd}",
                f"  Annual Sunshine: {data.annual_sunshine_hours} hours",
                f"  Roof Space Available: {data.roof_space_m2} m²",
                f"  Recommended Panels: {data.number_of_panels}",
            ]
        )
    return "\n".join(lines)


def _emit(out: TextIO, state: PipelineState, outcome: PipelineOutcome, *, as_json: bool) -> None:
    if as_json:
        out.write(json.dumps(outcome.to_dict(), ensure_ascii=False) + "\n")
    else:
        out.write(render_state(state) + "\n")


def _submit(pipeline: AddressInsightsPipeline, state: PipelineState, address: str) -> tuple[PipelineState, PipelineOutcome]:
    state = begin_submission(state)
    outcome = pipeline.submit(address)
    return finish_submission(state, outcome), outcome


def _interactive(
    pipeline: AddressInsightsPipeline,
    address: str,
    *,
    stdin: TextIO,
    out: TextIO,
    as_json: bool,
) -> int:
    state = PipelineState()
    last_ok = True
    while True:
        out.write(f"Enter Property Address [{address}]: ")
        out.flush()
        line = stdin.readline()
        if not line:
            break
        entry = line.strip()
        if entry.lower() in QUIT_WORDS:
            break
        if entry.lower() == DISMISS_WORD:
            state = dismiss_error(state)
            out.write(render_state(state) + "\n")
            continue
        if entry:
            address = entry
        state, outcome = _submit(pipeline, state, address)
        last_ok = outcome.ok
        _emit(out, state, outcome, as_json=as_json)
    return EXIT_SUCCESS if last_ok else EXIT_SUBMISSION_FAILED


def run_command(
    args: argparse.Namespace,
    *,
    http_client: HttpClient | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    run_id = generate_run_id()
    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = build_logger(run_id, level=args.log_level, log_dir=log_dir)
    out = stdout or sys.stdout

    try:
        settings = load_settings(
            Path(args.config_dir),
            overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
        )
    except PipelineError as exc:
        log_event(logger, f"configuration failed: {exc}", event="CONFIG_FAIL", status="error", error_code=exc.error_code)
        return EXIT_HARD_FAIL

    settings = settings.with_overrides(
        mode=args.mode,
        verify_credentials=False if args.skip_credential_check else None,
    )
    log_event(logger, f"settings loaded (mode={settings.mode})", event="CONFIG_LOADED", status="ok")

    with AddressInsightsPipeline(settings, http_client=http_client, logger=logger, run_id=run_id) as pipeline:
        if args.command == "interactive":
            return _interactive(pipeline, args.address, stdin=stdin or sys.stdin, out=out, as_json=args.json)

        state, outcome = _submit(pipeline, PipelineState(), args.address)
        _emit(out, state, outcome, as_json=args.json)
        return EXIT_SUCCESS if outcome.ok else EXIT_SUBMISSION_FAILED


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
