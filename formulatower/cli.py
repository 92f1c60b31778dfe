"""
Command-line entry point for Formula Tower.

Commands:
    play   interactive game in the terminal, countdown runs in real time
    eval   evaluate an expression
    rpn    show the postfix form of an expression

Defaults to `play` when no command is given.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

import numpy as np

from .expression import ExpressionError, evaluate, render_postfix, to_postfix, tokenize
from .game import GameClock, GameConfig, Phase, SessionDelta, list_target_policies, summary
from .game.session import format_value

HELP = """\
Commands:
  <expression>   submit an answer, e.g. 25*40+4
  r              remove a random number for bonus time
  s              start the game
  n              next round (after a correct answer)
  ?              show status and board
  new            restart
  q              quit
"""


def _cmd_eval(args: argparse.Namespace) -> int:
    try:
        value = evaluate(args.expression)
    except ExpressionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(format_value(value))
    return 0


def _cmd_rpn(args: argparse.Namespace) -> int:
    try:
        tokens = tokenize(args.expression)
        print(render_postfix(to_postfix(tokens)))
    except ExpressionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def _status_line(clock: GameClock) -> str:
    s = summary(clock.session)
    target = "CLEAR!" if s["awaiting_advance"] else s["target"]
    return (
        f"[{s['phase']}] round {s['round']}/{s['rounds']}  target {target}  "
        f"time {s['clock']}  correct {s['correct']}  {s['points']}pt  "
        f"available {s['available']}  used {s['used']}  removed {s['removed']}"
    )


async def _play(clock: GameClock) -> int:
    loop = asyncio.get_running_loop()

    def on_change(delta: SessionDelta) -> None:
        if delta.message:
            print(f"* {delta.message}")
        if delta.session.phase is Phase.OVER and delta.message:
            print(_status_line(clock))

    clock.subscribe(on_change)
    print(HELP)
    print(_status_line(clock))

    async with clock:
        while True:
            line = await loop.run_in_executor(None, input, "> ")
            cmd = line.strip()
            if cmd in ("q", "quit"):
                if clock.session.is_playing:
                    clock.terminate()
                return 0
            elif cmd == "r":
                clock.remove_random()
            elif cmd == "s":
                clock.start()
            elif cmd == "n":
                clock.advance_round()
            elif cmd == "new":
                await clock.restart()
                print(_status_line(clock))
            elif cmd in ("?", ""):
                print(clock.session.pool.board())
                print(_status_line(clock))
            else:
                clock.submit(cmd)
                if clock.session.is_playing:
                    print(_status_line(clock))


def _cmd_play(args: argparse.Namespace) -> int:
    config = GameConfig(
        base_time=args.time,
        target_count=args.rounds,
        target_policy=args.policy,
    )
    clock = GameClock(config, rng=np.random.default_rng(args.seed))
    try:
        return asyncio.run(_play(clock))
    except (EOFError, KeyboardInterrupt):
        print()
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="formula-tower", description="Formula Tower practice game")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    p_play = subparsers.add_parser("play", help="Play in the terminal")
    p_play.add_argument("--seed", type=int, default=None, help="Random seed")
    p_play.add_argument("--time", type=int, default=GameConfig.base_time, help="Starting countdown in seconds")
    p_play.add_argument("--rounds", type=int, default=GameConfig.target_count, help="Number of targets")
    p_play.add_argument("--policy", default="tower", choices=list_target_policies(), help="Target policy")
    p_play.set_defaults(func=_cmd_play)

    p_eval = subparsers.add_parser("eval", help="Evaluate an expression")
    p_eval.add_argument("expression")
    p_eval.set_defaults(func=_cmd_eval)

    p_rpn = subparsers.add_parser("rpn", help="Print the postfix form of an expression")
    p_rpn.add_argument("expression")
    p_rpn.set_defaults(func=_cmd_rpn)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint. Defaults to `play` if no command is provided."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    # No subcommand: behave like `formula-tower play`
    if args.command is None:
        args = parser.parse_args(list(argv) + ["play"])
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
