"""Per-player bookkeeping that outlives a single tank."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Player:
    number: int
    money: int = 0
    kills: int = 0

    def reward_kill(self, bounty: int) -> None:
        self.kills += 1
        self.money += bounty

    @property
    def name(self) -> str:
        return f"Player {self.number}"
