from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from fourline.ai.base import Agent
from fourline.core.board import Board
from fourline.core.rules import check_winner_with_line, is_draw, wins
from fourline.errors import ContractViolation, GameOverError
from fourline.game.state import GameState
from fourline.types import Move, Outcome, Player, other

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class GameSession:
    """
    Owns the board and drives one game at a time.

    Agents are bound to their side here, once. A side without an agent is
    played by hand through ``apply_move``. Win and draw are judged after every
    move from the cell that was just filled; the search never does this itself.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        agent_x: Optional[Agent] = None,
        agent_o: Optional[Agent] = None,
    ) -> None:
        if board is None:
            # play on the agents' board
            found = [a.board for a in (agent_x, agent_o) if a is not None]
            board = found[0] if found else Board()

        self.state = GameState(board=board)
        self.agents: Dict[Player, Optional[Agent]] = {"X": agent_x, "O": agent_o}
        for agent in self.agents.values():
            if agent is not None and agent.board is not board:
                raise ContractViolation(
                    f"{agent.name} searches a different board than this session owns."
                )
        for side, agent in self.agents.items():
            if agent is not None:
                agent.bind(side)

        self.winner: Optional[Player] = None
        self.winning_line: Optional[List[Coord]] = None
        self.drawn = False
        self.history: List[Move] = []

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current(self) -> Player:
        return self.state.current

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.drawn

    @property
    def outcome(self) -> Optional[Outcome]:
        if self.winner is not None:
            return self.winner
        if self.drawn:
            return "D"
        return None

    def apply_move(self, col: Move) -> int:
        """Drop a piece for the side to move. Returns the row it landed in."""
        if self.is_over:
            raise GameOverError()

        player = self.state.current
        row = self.board.drop(col, player)
        self.history.append(Move(int(col)))
        logger.debug("%s -> column %d (row %d)", player, col, row)

        if wins(self.board, row, int(col), player):
            self.winner = player
            found = check_winner_with_line(self.board)
            self.winning_line = found[1] if found else None
            self.state.last_status = f"Player {player} wins!"
            logger.info("Player %s wins after %d moves.", player, len(self.history))
            return row

        if is_draw(self.board):
            self.drawn = True
            self.state.last_status = "Draw game."
            logger.info("Draw after %d moves.", len(self.history))
            return row

        self.state.current = other(player)
        self.state.last_status = f"Player {player} chose {int(col) + 1} | Next: Player {self.state.current}"
        return row

    def step(self) -> Move:
        """Ask the agent whose turn it is for a column and play it."""
        if self.is_over:
            raise GameOverError()

        agent = self.agents[self.state.current]
        if agent is None:
            raise ContractViolation(f"Player {self.state.current} is played by hand; use apply_move().")

        move = agent.choose_move()
        self.apply_move(move)
        return move

    def play(self) -> Outcome:
        while not self.is_over:
            self.step()
        outcome = self.outcome
        assert outcome is not None
        return outcome

    def reset(self) -> None:
        """Clear the board and start over with X to move. Agents keep their sides."""
        self.board.reset()
        self.state.current = "X"
        self.state.last_status = "Player X starts."
        self.winner = None
        self.winning_line = None
        self.drawn = False
        self.history.clear()
        logger.info("Board reset.")
