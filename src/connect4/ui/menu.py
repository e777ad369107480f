from __future__ import annotations

import random
from typing import Optional

from connect4.game.controller import run_game
from connect4.game.session import GameMode, GameSession
from connect4.types import RED, YELLOW, Player
from connect4.ui.colors import name


def _choose_side(rng: random.Random) -> Player:
    choice = input("Play as 1) Red (moves first), 2) Yellow or 3) Random colour? [3] ").strip()
    if choice == "1":
        return RED
    if choice == "2":
        return YELLOW
    return rng.choice([RED, YELLOW])


def _allow_undo() -> bool:
    return input("Allow undo? [y/N] ").strip().lower() in {"y", "yes"}


def run_menu(rng: Optional[random.Random] = None) -> None:
    rng = rng or random.Random()

    print("Select mode:")
    print("1) Human vs Human")
    print("2) Human vs Random")
    print("3) Human vs Computer")

    choice = input("Choice: ").strip()

    if choice == "2":
        mode = GameMode.PLAYER_V_RANDOM
    elif choice == "3":
        mode = GameMode.PLAYER_V_COMPUTER
    else:
        if choice != "1":
            print("\nInvalid choice. Defaulting to Human vs Human.\n")
        mode = GameMode.PLAYER_V_PLAYER

    human = RED if mode is GameMode.PLAYER_V_PLAYER else _choose_side(rng)
    session = GameSession(mode, human=human, allow_undo=_allow_undo())
    if mode is not GameMode.PLAYER_V_PLAYER:
        print(f"\nYou play {name(human)}.\n")

    try:
        run_game(session)
    finally:
        session.cancel()
