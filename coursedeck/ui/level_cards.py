"""Level carousel UI: LevelCard and LevelCarouselWidget."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QEasingCurve, QPoint, QPropertyAnimation, Qt
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from coursedeck.core.carousel import LevelCarouselState, LevelRole
from coursedeck.ui.colors import DeckColors, with_alpha
from coursedeck.ui.models import LevelCardState, build_level_card_states

# (opacity, scale) per role; locked cards are dimmed further
ROLE_LOOK = {
    LevelRole.ACTIVE: (1.0, 1.0),
    LevelRole.PREV: (0.7, 0.8),
    LevelRole.NEXT: (0.7, 0.8),
    LevelRole.NEUTRAL: (0.5, 0.8),
}
LOCKED_OPACITY = 0.3
CARD_HEIGHT = 360
ANIMATION_MS = 500


class LevelCard(QFrame):
    """A level card with stats and a start button."""

    def __init__(
        self,
        *,
        on_start: Callable[[int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._on_start = on_start
        self._index = -1
        self._role = LevelRole.NEUTRAL

        self.setObjectName("levelCard")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self._icon = QLabel("")
        self._icon.setObjectName("levelIcon")
        self._icon.setAlignment(Qt.AlignCenter)
        self._icon.setFixedSize(60, 60)

        self._title = QLabel("")
        self._title.setObjectName("levelTitle")
        self._title.setAlignment(Qt.AlignCenter)

        self._badge = QLabel("")
        self._badge.setObjectName("levelBadge")
        self._badge.setAlignment(Qt.AlignCenter)

        stats = QWidget()
        stats_layout = QGridLayout(stats)
        stats_layout.setContentsMargins(0, 0, 0, 0)
        stats_layout.setHorizontalSpacing(12)
        self._points = QLabel("")
        self._time = QLabel("")
        self._proficiency = QLabel("")
        for col, (value, caption) in enumerate(
            ((self._points, "Points"), (self._time, "Time Required"), (self._proficiency, "Proficiency"))
        ):
            value.setObjectName("statValue")
            value.setAlignment(Qt.AlignCenter)
            label = QLabel(caption)
            label.setObjectName("statLabel")
            label.setAlignment(Qt.AlignCenter)
            stats_layout.addWidget(value, 0, col)
            stats_layout.addWidget(label, 1, col)

        self._learn_more = QPushButton("Learn More")
        self._learn_more.setObjectName("secondaryButton")
        self._action = QPushButton("")
        self._action.setObjectName("primaryButton")
        self._action.setCursor(Qt.PointingHandCursor)
        self._action.clicked.connect(self._on_action_clicked)

        actions = QHBoxLayout()
        actions.setSpacing(8)
        actions.addWidget(self._learn_more)
        actions.addWidget(self._action)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)
        layout.addWidget(self._icon, 0, Qt.AlignHCenter)
        layout.addWidget(self._title)
        layout.addWidget(self._badge, 0, Qt.AlignHCenter)
        layout.addWidget(stats)
        layout.addStretch(1)
        layout.addLayout(actions)

        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)

    def set_state(self, state: LevelCardState) -> None:
        self._index = state.index
        self._role = state.role
        level = state.level

        self._icon.setText(str(level.id))
        self._title.setText(f"Level {level.id}")
        self._badge.setVisible(state.badge is not None)
        self._badge.setText(state.badge or "")
        self._points.setText(str(level.points))
        self._time.setText(level.time_required)
        self._proficiency.setText(f"{level.proficiency_percent}%")
        self._action.setText(state.action_label)
        self._action.setEnabled(state.can_start)
        self.setToolTip("Locked" if state.locked else "")

        opacity, _ = ROLE_LOOK[state.role]
        if state.locked and state.role is not LevelRole.ACTIVE:
            opacity = LOCKED_OPACITY
        self._opacity.setOpacity(opacity)
        self._apply_styles(state.role is LevelRole.ACTIVE)

    @property
    def scale(self) -> float:
        return ROLE_LOOK[self._role][1]

    def _on_action_clicked(self) -> None:
        if self._index >= 0:
            self._on_start(self._index)

    def _apply_styles(self, active: bool) -> None:
        background = DeckColors.LEVEL_CARD_ACTIVE_BG if active else DeckColors.LEVEL_CARD_BG
        border = with_alpha(DeckColors.PRIMARY, 0.35 if active else 0.08)
        self.setStyleSheet(
            f"""
            QFrame#levelCard {{
                background: {background};
                border-radius: 16px;
                border: 1px solid {border};
            }}
            QLabel#levelIcon {{
                background: {DeckColors.PRIMARY};
                color: white;
                border-radius: 12px;
                font-size: 24px;
                font-weight: 700;
            }}
            QLabel#levelTitle {{
                color: {DeckColors.TEXT_PRIMARY};
                font-size: 18px;
                font-weight: 600;
            }}
            QLabel#levelBadge {{
                background: {DeckColors.PRIMARY};
                color: white;
                padding: 4px 12px;
                border-radius: 11px;
                font-size: 12px;
            }}
            QLabel#statValue {{
                color: {DeckColors.PRIMARY};
                font-weight: 600;
            }}
            QLabel#statLabel {{
                color: {DeckColors.TEXT_SECONDARY};
                font-size: 11px;
            }}
            QPushButton#primaryButton {{
                background: {DeckColors.PRIMARY};
                color: white;
                border: none;
                border-radius: 8px;
                padding: 8px 12px;
            }}
            QPushButton#primaryButton:disabled {{
                background: {with_alpha(DeckColors.PRIMARY, 0.35)};
            }}
            QPushButton#secondaryButton {{
                background: white;
                color: {DeckColors.PRIMARY};
                border: 1px solid {DeckColors.PRIMARY};
                border-radius: 8px;
                padding: 8px 12px;
            }}
            """
        )


class LevelCarouselWidget(QWidget):
    """Horizontal strip of LevelCards positioned by the carousel's render offset."""

    def __init__(
        self,
        *,
        card_width: int,
        on_previous: Callable[[], None],
        on_next: Callable[[], None],
        on_start: Callable[[int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._card_width = card_width
        self._on_start = on_start
        self._carousel: Optional[LevelCarouselState] = None
        self._cards: list[LevelCard] = []

        self.setMinimumHeight(CARD_HEIGHT + 40)
        self._strip = QWidget(self)
        self._strip.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._strip.setStyleSheet("background: transparent;")
        self._animation = QPropertyAnimation(self._strip, b"pos", self)
        self._animation.setDuration(ANIMATION_MS)
        self._animation.setEasingCurve(QEasingCurve.Type.InOutCubic)

        self._prev_button = self._nav_button("←", on_previous)
        self._next_button = self._nav_button("→", on_next)

    def _nav_button(self, text: str, handler: Callable[[], None]) -> QPushButton:
        button = QPushButton(text, self)
        button.setFixedSize(40, 40)
        button.setCursor(Qt.PointingHandCursor)
        button.setStyleSheet(
            f"""
            QPushButton {{
                background: white;
                color: {DeckColors.PRIMARY};
                border: 1px solid {DeckColors.CARD_BORDER};
                border-radius: 20px;
                font-size: 18px;
            }}
            QPushButton:disabled {{
                color: {with_alpha(DeckColors.PRIMARY, 0.3)};
            }}
            """
        )
        button.clicked.connect(handler)
        return button

    def set_carousel(self, carousel: LevelCarouselState, animate: bool = True) -> None:
        self._carousel = carousel
        states = build_level_card_states(carousel)
        while len(self._cards) < len(states):
            self._cards.append(LevelCard(on_start=self._on_start, parent=self._strip))
        for card, state in zip(self._cards, states):
            card.set_state(state)
            card.show()
        for card in self._cards[len(states):]:
            card.hide()

        self._prev_button.setEnabled(carousel.can_retreat())
        self._next_button.setEnabled(carousel.can_advance())
        self._relayout(animate)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._relayout(animate=False)

    def _strip_target(self) -> QPoint:
        assert self._carousel is not None
        pitch = self._carousel.pitch
        strip_width = (self._carousel.total_levels - 1) * pitch + self._card_width
        # strip centered on the widget, then shifted by the carousel offset
        x = self.width() / 2 - strip_width / 2 + self._carousel.render_offset()
        return QPoint(int(round(x)), 20)

    def _relayout(self, animate: bool) -> None:
        if self._carousel is None:
            return
        pitch = self._carousel.pitch
        total = self._carousel.total_levels
        self._strip.resize((total - 1) * pitch + self._card_width, CARD_HEIGHT)
        for i, card in enumerate(self._cards[:total]):
            w = int(self._card_width * card.scale)
            h = int(CARD_HEIGHT * card.scale)
            slot_center = i * pitch + self._card_width // 2
            card.setGeometry(slot_center - w // 2, (CARD_HEIGHT - h) // 2, w, h)
            if card.scale >= 1.0:
                card.raise_()

        target = self._strip_target()
        self._animation.stop()
        if animate and self._strip.pos() != target:
            self._animation.setStartValue(self._strip.pos())
            self._animation.setEndValue(target)
            self._animation.start()
        else:
            self._strip.move(target)

        mid_y = self.height() // 2 - 20
        self._prev_button.move(8, mid_y)
        self._next_button.move(self.width() - 48, mid_y)
        self._prev_button.raise_()
        self._next_button.raise_()
