from __future__ import annotations

from connect4.log import configure_logging
from connect4.ui.menu import run_menu


def main() -> None:
    configure_logging()
    run_menu()


if __name__ == "__main__":
    main()
