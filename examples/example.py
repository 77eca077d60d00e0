"""Example usage of DepartureBoard: print the board once, or keep it refreshing."""

import logging
import sys
import time
from pathlib import Path

# Add src to path so we can import metroboard
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from metroboard.board import DepartureBoard
from metroboard.config import settings

# Set up logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_board(board: DepartureBoard):
    """Print a snapshot of the board for the current moment."""
    print(f"\n{'='*70}")
    for line in board.render_lines(board.get_board_data()):
        print(line)
    print(f"{'='*70}\n")


def watch_mode(board: DepartureBoard):
    """
    Redraw the board every settings.refresh_seconds.

    Press Ctrl+C to stop. The schedule is reloaded when the day changes.
    """
    try:
        while True:
            if board.clock().date() != board.generated_for:
                board.load()
            print("\033[2J\033[H", end="")
            print_board(board)
            time.sleep(settings.refresh_seconds)
    except KeyboardInterrupt:
        print("\nGoodbye!")


if __name__ == "__main__":
    try:
        board = DepartureBoard()
    except Exception as e:
        logger.error(f"Failed to load schedule: {e}", exc_info=True)
        sys.exit(1)

    if len(sys.argv) > 1 and sys.argv[1] == "--watch":
        watch_mode(board)
    else:
        print_board(board)
