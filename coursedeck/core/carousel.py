from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence, Tuple

from coursedeck.core.courses import Level, apply_unlock_rule
from coursedeck.core.settings import DEFAULT_CARD_SPACING, DEFAULT_CARD_WIDTH

logger = logging.getLogger(__name__)


class LevelRole(str, Enum):
    """Position of a level card relative to the active one."""

    ACTIVE = "active"
    PREV = "prev"
    NEXT = "next"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class CarouselCursor:
    active_index: int
    total_levels: int

    def __post_init__(self) -> None:
        if self.total_levels < 1:
            raise ValueError("A carousel needs at least one level")
        if not 0 <= self.active_index < self.total_levels:
            raise ValueError(
                f"active_index {self.active_index} outside 0..{self.total_levels - 1}"
            )

    @property
    def at_first(self) -> bool:
        return self.active_index == 0

    @property
    def at_last(self) -> bool:
        return self.active_index == self.total_levels - 1

    def advanced(self) -> "CarouselCursor":
        """Cursor moved one level forward, or ``self`` at the last level."""
        if self.at_last:
            return self
        return replace(self, active_index=self.active_index + 1)

    def retreated(self) -> "CarouselCursor":
        """Cursor moved one level back, or ``self`` at the first level."""
        if self.at_first:
            return self
        return replace(self, active_index=self.active_index - 1)


class LevelCarouselState:
    """Levels of the open course and the index of the focused (active) card.

    Moves saturate at both ends. Roles and the strip offset are pure queries
    on the cursor so a view can render without keeping its own copy.
    """

    def __init__(
        self,
        levels: Sequence[Level],
        pitch: int = DEFAULT_CARD_WIDTH + DEFAULT_CARD_SPACING,
        unlock_all: bool = False,
    ) -> None:
        self._levels: Tuple[Level, ...] = apply_unlock_rule(levels, unlock_all=unlock_all)
        self._unlock_all = unlock_all
        self._cursor = CarouselCursor(active_index=0, total_levels=len(self._levels))
        self._pitch = pitch

    @property
    def levels(self) -> Tuple[Level, ...]:
        return self._levels

    @property
    def cursor(self) -> CarouselCursor:
        return self._cursor

    @property
    def active_index(self) -> int:
        return self._cursor.active_index

    @property
    def total_levels(self) -> int:
        return self._cursor.total_levels

    @property
    def active_level(self) -> Level:
        return self._levels[self._cursor.active_index]

    @property
    def pitch(self) -> int:
        return self._pitch

    def can_advance(self) -> bool:
        return not self._cursor.at_last

    def can_retreat(self) -> bool:
        return not self._cursor.at_first

    def advance(self) -> bool:
        """Focus the next level. Returns False (and changes nothing) at the last level."""
        moved = self._cursor.advanced()
        if moved is self._cursor:
            logger.debug("advance() ignored: already at level index %d", self.active_index)
            return False
        self._cursor = moved
        return True

    def retreat(self) -> bool:
        """Focus the previous level. Returns False (and changes nothing) at the first level."""
        moved = self._cursor.retreated()
        if moved is self._cursor:
            logger.debug("retreat() ignored: already at level index 0")
            return False
        self._cursor = moved
        return True

    def role_of(self, level_index: int) -> LevelRole:
        active = self._cursor.active_index
        if level_index == active:
            return LevelRole.ACTIVE
        if level_index == active - 1:
            return LevelRole.PREV
        if level_index == active + 1:
            return LevelRole.NEXT
        return LevelRole.NEUTRAL

    def is_locked(self, level_index: int) -> bool:
        return self._level_at(level_index).is_locked

    def can_start(self, level_index: int) -> bool:
        """Whether the level's start/resume button is enabled.

        A locked level can only be started while it is the active card.
        """
        level = self._level_at(level_index)
        return not level.is_locked or level_index == self._cursor.active_index

    def render_offset(self) -> float:
        """Horizontal translation of the card strip from the center anchor, in px."""
        half_width = (self.total_levels - 1) * self._pitch / 2
        return half_width - self._cursor.active_index * self._pitch

    def mark_completed(self, level_index: int) -> bool:
        """Mark an unlocked level completed and unlock the one after it.

        The change lives only as long as this carousel does.
        """
        level = self._level_at(level_index)
        if level.is_locked:
            logger.info("Level %d is locked and cannot be completed", level.id)
            return False
        levels = list(self._levels)
        levels[level_index] = replace(level, is_completed=True)
        nxt = level_index + 1
        # completing a level lifts the declared lock of the following level only
        if nxt < len(levels):
            levels[nxt] = replace(levels[nxt], is_locked=False)
        updated = apply_unlock_rule(levels, unlock_all=self._unlock_all)
        if updated == self._levels:
            return False
        self._levels = updated
        logger.info("Level %d completed", level.id)
        return True

    def _level_at(self, level_index: int) -> Level:
        if not 0 <= level_index < len(self._levels):
            raise IndexError(f"level index {level_index} outside 0..{len(self._levels) - 1}")
        return self._levels[level_index]
