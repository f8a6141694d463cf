"""Command line scorer.

    handcalc --tiles 123m 456p 789s EEEw 22p --win 2p --riichi
    handcalc --manual 4 30 --ba 3
    handcalc --file hands.txt
"""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path

from handcalc.config import settings
from handcalc.hand_scoring import score_hand_shape, score_manual
from handcalc.logging import get_logger, setup_logging
from handcalc.schemas import (
    ContextInput,
    ErrorBody,
    ErrorResponse,
    HandInput,
    Payments,
    ScoreResult,
    WinType,
)

logger = get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handcalc", description="Riichi mahjong hand and score calculator")
    parser.add_argument("--tiles", nargs="+", metavar="GROUP", help="hand groups, winning group last (e.g. 123m EEEw 55po)")
    parser.add_argument("-w", "--win", help="winning tile (e.g. 3m)")
    parser.add_argument("-d", "--dora", type=int, default=0, help="han from dora (default: 0)")
    parser.add_argument("-s", "--seat", default="Ew", help="seat wind (default: Ew)")
    parser.add_argument("-p", "--prev", default="Ew", help="prevalent (round) wind (default: Ew)")
    parser.add_argument("-t", "--tsumo", action="store_true", help="won by self-draw")
    parser.add_argument("-r", "--riichi", action="store_true")
    parser.add_argument("--double-riichi", action="store_true")
    parser.add_argument("-i", "--ippatsu", action="store_true")
    parser.add_argument("--haitei", action="store_true")
    parser.add_argument("--houtei", action="store_true")
    parser.add_argument("--rinshan", action="store_true")
    parser.add_argument("--chankan", action="store_true")
    parser.add_argument("--tenhou", action="store_true", help="won on the first draw (tenhou / chiihou)")
    parser.add_argument("-b", "--ba", type=int, default=0, help="honba count (default: 0)")
    parser.add_argument(
        "-m",
        "--manual",
        nargs=2,
        type=int,
        metavar=("HAN", "FU"),
        help="calculator mode: score han and fu directly",
    )
    parser.add_argument("--file", type=Path, help="score one argument line per hand from a file")
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def _payment_lines(payments: Payments, non_dealer: str = "Non-dealer") -> list[str]:
    return [
        f"Dealer: {payments.dealer_ron} ({payments.dealer_tsumo})",
        f"{non_dealer}: {payments.non_dealer_ron} "
        f"({payments.non_dealer_tsumo_to_non_dealer}/{payments.non_dealer_tsumo_to_dealer})",
    ]


def format_manual(han: int, fu: int, payments: Payments) -> str:
    header = f"{han} Han/ {fu} Fu"
    if payments.honba:
        header += f"/ {payments.honba} Honba"
    return "\n".join([header, *_payment_lines(payments, non_dealer="non-dealer")])


def format_result(result: ScoreResult, dora: int = 0) -> str:
    if result.yakuman:
        header = result.point_label
    else:
        header = f"{result.han} Han/ {result.fu} Fu"
        if result.honba:
            header += f"/ {result.honba} Honba"
    lines = [header, *_payment_lines(result.payments)]

    if not result.yakuman and dora:
        lines += ["", f"Dora: {dora}"]

    lines += ["", "Yaku:"]
    for item in result.yaku:
        worth = "Yakuman" if item.yakuman else f"{item.han} Han"
        lines.append(f"  {item.name}: {worth}")

    if not result.yakuman:
        lines += ["", "Fu:"]
        lines.extend(f"  {item.name}: {item.fu}" for item in result.fu_breakdown)
    return "\n".join(lines)


def _context_from_args(args: argparse.Namespace) -> ContextInput:
    return ContextInput(
        win_type=WinType.tsumo if args.tsumo else WinType.ron,
        riichi=args.riichi,
        double_riichi=args.double_riichi,
        ippatsu=args.ippatsu,
        haitei=args.haitei,
        houtei=args.houtei,
        rinshan=args.rinshan,
        chankan=args.chankan,
        tenhou=args.tenhou,
        dora=args.dora,
        honba=args.ba,
    )


def run(args: argparse.Namespace) -> str:
    """Score one invocation and return the rendered output. Raises ValueError on bad input."""
    rules = settings.rules()
    if args.manual is not None:
        han, fu = args.manual
        payments = score_manual(han, fu, args.ba, rules)
        if args.json:
            return payments.model_dump_json(indent=2)
        return format_manual(han, fu, payments)

    hand = HandInput(
        groups=args.tiles or [],
        win_tile=args.win or "",
        seat_wind=args.seat,
        round_wind=args.prev,
    )
    result = score_hand_shape(hand, _context_from_args(args), rules)
    if args.json:
        return result.model_dump_json(indent=2)
    return format_result(result, args.dora)


def _report_error(exc: ValueError, json_mode: bool, line: int | None = None) -> None:
    logger.warning("hand rejected", error=type(exc).__name__, message=str(exc), line=line)
    if json_mode:
        details = {"line": line} if line is not None else None
        body = ErrorBody(code=type(exc).__name__, message=str(exc), details=details)
        print(ErrorResponse(error=body).model_dump_json(indent=2))
        return
    prefix = f"Line {line}: " if line is not None else ""
    print(f"{prefix}Error: {exc}", file=sys.stderr)


def run_file(parser: argparse.ArgumentParser, path: Path, json_mode: bool) -> int:
    """Score every argument line in ``path``; returns 1 if any line failed."""
    failed = False
    for number, raw in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            line_args = parser.parse_args(shlex.split(line))
        except SystemExit:
            # argparse already printed the usage error
            failed = True
            continue
        line_args.json = line_args.json or json_mode
        try:
            print(run(line_args))
        except ValueError as exc:
            _report_error(exc, line_args.json, number)
            failed = True
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else None)

    if args.file is not None:
        if not args.file.exists():
            print(f"File not found: {args.file}", file=sys.stderr)
            return 1
        return run_file(parser, args.file, args.json)

    try:
        print(run(args))
    except ValueError as exc:
        _report_error(exc, args.json)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
