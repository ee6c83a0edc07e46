"""
Arcade 2048 CLI - Command-line interface for the engine.

Usage:
    arcade2048 play [--seed N] [--rows R] [--columns C]   Play in the terminal
    arcade2048 serve [--host H] [--port P]                Run the REST API

Keys while playing: w/a/s/d or k/h/j/l to move, r to reset, q to quit.
"""

import argparse
import logging
import os
import random
import sys

from .engine_core import Board, Direction, GameStatus, InvalidOperation, Snapshot


KEYMAP = {
    "a": Direction.LEFT, "h": Direction.LEFT,
    "d": Direction.RIGHT, "l": Direction.RIGHT,
    "w": Direction.UP, "k": Direction.UP,
    "s": Direction.DOWN, "j": Direction.DOWN,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Arcade 2048 - 2048 game engine and score service",
        prog="arcade2048",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play 2048 in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for tile placement")
    play_parser.add_argument("--rows", type=int, default=4, help="Board height")
    play_parser.add_argument("--columns", type=int, default=4, help="Board width")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("ARCADE2048_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def render(snapshot: Snapshot) -> str:
    """Board plus a status line."""
    board = Board(cells=snapshot.grid)
    return f"{board.render()}\n\nScore: {snapshot.score}   Status: {snapshot.status.value}"


def cmd_play(args, input_fn=input, output=print):
    """Interactive terminal game."""
    from .scoreboard import InMemoryScoreboard
    from .session import GameSession

    scoreboard = InMemoryScoreboard()
    session = GameSession(
        rows=args.rows,
        columns=args.columns,
        rng=random.Random(args.seed),
        reporter=scoreboard,
    )
    output(render(session.snapshot()))

    while True:
        try:
            key = input_fn("> ").strip().lower()
        except EOFError:
            break

        if key == "q":
            break
        if key == "r":
            output(render(session.reset()))
            continue
        if key not in KEYMAP:
            output("Use w/a/s/d (or k/h/j/l) to move, r to reset, q to quit")
            continue

        try:
            snapshot = session.move(KEYMAP[key])
        except InvalidOperation:
            output("Game over. Press r to play again or q to quit.")
            continue

        output(render(snapshot))
        if snapshot.is_terminal:
            title = "You reached 2048!" if snapshot.status is GameStatus.WON else "No moves left."
            output(f"\n{title} Final score: {snapshot.score}")
            receipt = session.wait_for_report(timeout=5.0)
            if receipt and receipt.rank:
                output(f"Rank #{receipt.rank} this session")

    high = scoreboard.analytics(session.game_id).high_score
    if high is not None:
        output(f"Best score: {high}")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("arcade2048.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
