from __future__ import annotations

from typing import Tuple

from connect4.game.session import GameMode, GameSession
from connect4.types import DRAW
from connect4.ui.colors import name
from connect4.ui.effects import ai_thinking
from connect4.ui.prompts import parse_move
from connect4.ui.render import render


def _opponent_name(session: GameSession) -> str:
    if session.mode is GameMode.PLAYER_V_RANDOM:
        return "Random"
    if session.mode is GameMode.PLAYER_V_COMPUTER:
        return "Computer"
    return "Human"


def _status_with_players(status: str, session: GameSession) -> str:
    """
    Prepend a persistent header showing who plays which colour.
    """
    engine = session.engine
    if session.mode is GameMode.PLAYER_V_PLAYER:
        header = f"Human vs Human | Turn: {name(engine.current_turn())}"
    else:
        header = (
            f"You: {name(session.human)} | Opponent: {_opponent_name(session)} | "
            f"Turn: {name(engine.current_turn())}"
        )
    if status:
        return f"{header}\n{status}"
    return header


def _machine_turn(session: GameSession, show_thinking: bool) -> Tuple[str, bool]:
    """Let the machine move. Returns the status line and whether the machine is now paused."""
    engine = session.engine
    who = name(engine.current_turn())

    if not session.auto_move():
        return "", False

    if session.is_thinking():
        try:
            if show_thinking:
                ai_thinking(session.is_thinking, f"{_opponent_name(session)} is thinking")
            session.worker.join()
        except KeyboardInterrupt:
            # Hand the turn back to the human
            if session.undo():
                return "Search cancelled; your last move was taken back.", False
            session.cancel()
            return "Search cancelled.", True

    last = engine.last_play()
    if last is None:
        return "", False

    info = engine.last_info
    if session.mode is GameMode.PLAYER_V_COMPUTER and info:
        return (
            f"{who} chose {int(last.column) + 1} | "
            f"d={info.get('depth')} | "
            f"nodes={info.get('nodes')} | "
            f"tt={info.get('tt_hits')} | "
            f"cut={info.get('cutoffs')} | "
            f"eval={info.get('eval')} | "
            f"{info.get('time_ms')}ms"
        ), False
    return f"{who} chose {int(last.column) + 1}", False


def _undo(session: GameSession) -> str:
    if not session.allow_undo:
        return "Undo is disabled for this game."
    return "Move taken back." if session.undo() else "No more moves to undo."


def _paused_turn(session: GameSession) -> Tuple[str, bool]:
    raw = input(f"{_opponent_name(session)} is paused. Enter to resume, u to undo, q to quit: ").strip().lower()
    if raw in {"q", "quit", "exit"}:
        return "quit", True
    if raw in {"u", "undo"}:
        return _undo(session), True
    return "", False


def run_game(session: GameSession, show_thinking: bool = True) -> None:
    engine = session.engine
    status = f"{name(engine.current_turn())} starts."
    paused = False

    while True:
        state = engine.state()

        if state.is_over():
            win = engine.board.winning_line()
            if state.result == DRAW or win is None:
                render(state, _status_with_players("Draw game.", session))
            else:
                player, line = win
                render(state, _status_with_players(f"{name(player)} wins!", session), highlight=line)
            return

        render(state, _status_with_players(status, session))

        if not session.is_players_turn():
            if paused:
                status, paused = _paused_turn(session)
                if status == "quit":
                    render(engine.state(), _status_with_players("Game quit.", session))
                    return
                continue
            status, paused = _machine_turn(session, show_thinking)
            continue
        paused = False

        current = name(engine.current_turn())
        try:
            parsed = parse_move(input(f"{current} move: "), state.cols)
        except ValueError as e:
            status = str(e)
            continue

        if parsed == "quit":
            session.cancel()
            render(engine.state(), _status_with_players("Game quit.", session))
            return

        if parsed == "undo":
            status = _undo(session)
            continue

        if session.submit(parsed):
            status = f"{current} chose {int(parsed) + 1}"
        else:
            status = f"Column {int(parsed) + 1} is full."
