from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from coursedeck.core.selection import CourseSelectionState
from coursedeck.core.settings import Settings
from coursedeck.ui.colors import DeckColors, blend_hex
from coursedeck.ui.level_cards import LevelCarouselWidget
from coursedeck.ui.models import CourseCardState, build_course_card_states

logger = logging.getLogger(__name__)


class CourseCard(QFrame):
    """Course row: title, progress, difficulty segments and the carousel toggle."""

    def __init__(
        self,
        state: CourseCardState,
        *,
        on_toggle: Callable[[int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        course = state.course
        self.setObjectName("courseCard")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        title = QLabel(f"{course.id}. {course.title}")
        title.setObjectName("courseTitle")
        percent = QLabel(f"{course.progress_percent}%")
        percent.setObjectName("courseProgress")
        header = QHBoxLayout()
        header.addWidget(title, 1)
        header.addWidget(percent, 0, Qt.AlignRight)

        segments = QHBoxLayout()
        segments.setSpacing(2)
        split = course.difficulty
        for width, color in (
            (split.easy, DeckColors.EASY),
            (split.medium, DeckColors.MEDIUM),
            (split.hard, DeckColors.HARD),
        ):
            if width <= 0:
                continue
            segment = QFrame()
            segment.setFixedHeight(8)
            segment.setStyleSheet(f"background: {color}; border-radius: 4px;")
            segments.addWidget(segment, width)

        labels = QHBoxLayout()
        for text in ("Easy", "Medium", "Hard"):
            label = QLabel(text)
            label.setObjectName("difficultyLabel")
            labels.addWidget(label, 1, Qt.AlignCenter)

        learn_more = QPushButton("Learn More")
        learn_more.setObjectName("secondaryButton")
        toggle = QPushButton(state.toggle_label)
        toggle.setObjectName("primaryButton")
        toggle.setCursor(Qt.PointingHandCursor)
        toggle.clicked.connect(lambda: on_toggle(course.id))
        actions = QHBoxLayout()
        actions.addStretch(1)
        actions.addWidget(learn_more)
        actions.addWidget(toggle)

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(24, 20, 24, 20)
        self._layout.setSpacing(12)
        self._layout.addLayout(header)
        self._layout.addLayout(segments)
        self._layout.addLayout(labels)
        self._layout.addLayout(actions)

        self.setStyleSheet(
            f"""
            QFrame#courseCard {{
                background: {DeckColors.CARD_BG};
                border: 1px solid {DeckColors.CARD_BORDER};
                border-radius: 16px;
            }}
            QLabel#courseTitle {{
                color: {DeckColors.TEXT_PRIMARY};
                font-size: 18px;
                font-weight: 600;
            }}
            QLabel#courseProgress {{
                color: {DeckColors.PRIMARY};
                font-weight: 700;
            }}
            QLabel#difficultyLabel {{
                color: {DeckColors.TEXT_SECONDARY};
                font-size: 11px;
            }}
            QPushButton#primaryButton {{
                background: {DeckColors.PRIMARY};
                color: white;
                border: none;
                border-radius: 8px;
                padding: 8px 16px;
            }}
            QPushButton#primaryButton:hover {{
                background: {blend_hex(DeckColors.PRIMARY, "#000000", 0.15)};
            }}
            QPushButton#secondaryButton {{
                background: white;
                color: {DeckColors.PRIMARY};
                border: 1px solid {DeckColors.PRIMARY};
                border-radius: 8px;
                padding: 8px 16px;
            }}
            """
        )

    def attach_carousel(self, widget: QWidget) -> None:
        self._layout.addWidget(widget)


class MainWindow(QMainWindow):
    """Course list with one expandable level carousel.

    All user actions go through the CourseSelectionState; the window only
    re-renders what the state reports.
    """

    def __init__(self, selection: CourseSelectionState, settings: Settings) -> None:
        super().__init__()
        self._selection = selection
        self._settings = settings
        self._courses_layout: Optional[QVBoxLayout] = None
        self._carousel_widget: Optional[LevelCarouselWidget] = None

        self.setWindowTitle("CourseDeck")
        self.resize(1100, 820)
        self._build_ui()
        self._refresh_courses()

        QShortcut(QKeySequence(Qt.Key_Left), self, activated=self._go_previous)
        QShortcut(QKeySequence(Qt.Key_Right), self, activated=self._go_next)

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("root")
        root.setStyleSheet(f"QWidget#root {{ background: {DeckColors.PAGE_BG}; }}")

        nav = QFrame()
        nav.setStyleSheet(f"background: {DeckColors.NAV_BG}; border-bottom: 1px solid {DeckColors.CARD_BORDER};")
        nav_layout = QHBoxLayout(nav)
        nav_layout.setContentsMargins(24, 12, 24, 12)
        logo = QLabel("CourseDeck")
        logo.setStyleSheet(f"color: {DeckColors.PRIMARY}; font-size: 20px; font-weight: 700; border: none;")
        nav_layout.addWidget(logo)
        nav_layout.addStretch(1)
        for text, active in (("Home", False), ("My Courses", True), ("Results", False)):
            link = QLabel(text)
            color = DeckColors.PRIMARY if active else DeckColors.TEXT_SECONDARY
            link.setStyleSheet(f"color: {color}; font-weight: {700 if active else 400}; border: none;")
            nav_layout.addWidget(link)

        page_title = QLabel("My Courses")
        page_title.setStyleSheet(f"color: {DeckColors.TEXT_PRIMARY}; font-size: 28px; font-weight: 700;")

        container = QWidget()
        container.setStyleSheet("background: transparent;")
        self._courses_layout = QVBoxLayout(container)
        self._courses_layout.setContentsMargins(0, 0, 0, 0)
        self._courses_layout.setSpacing(16)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(container)

        body = QVBoxLayout()
        body.setContentsMargins(32, 24, 32, 24)
        body.setSpacing(16)
        body.addWidget(page_title)
        body.addWidget(scroll, 1)

        layout = QVBoxLayout(root)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(nav)
        layout.addLayout(body, 1)
        self.setCentralWidget(root)

    def _refresh_courses(self) -> None:
        """Rebuild the course cards from the selection state."""
        if self._courses_layout is None:
            return
        while self._courses_layout.count():
            item = self._courses_layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()
        self._carousel_widget = None

        for state in build_course_card_states(self._selection):
            card = CourseCard(state, on_toggle=self._toggle_course)
            if state.expanded and self._selection.carousel is not None:
                self._carousel_widget = LevelCarouselWidget(
                    card_width=self._settings.card_width,
                    on_previous=self._go_previous,
                    on_next=self._go_next,
                    on_start=self._start_level,
                )
                self._carousel_widget.set_carousel(self._selection.carousel, animate=False)
                card.attach_carousel(self._carousel_widget)
            self._courses_layout.addWidget(card)
        self._courses_layout.addStretch(1)

    def _toggle_course(self, course_id: int) -> None:
        if self._selection.toggle_course(course_id):
            self._refresh_courses()

    def _go_next(self) -> None:
        if self._selection.go_to_next_level():
            self._refresh_carousel()

    def _go_previous(self) -> None:
        if self._selection.go_to_previous_level():
            self._refresh_carousel()

    def _refresh_carousel(self) -> None:
        carousel = self._selection.carousel
        if self._carousel_widget is not None and carousel is not None:
            self._carousel_widget.set_carousel(carousel)

    def _start_level(self, level_index: int) -> None:
        carousel = self._selection.carousel
        course = self._selection.currently_expanded_course()
        if carousel is None or course is None or not carousel.can_start(level_index):
            return
        level = carousel.levels[level_index]
        logger.info("Start requested for course %d level %d", course.id, level.id)
        self.statusBar().showMessage(f"{course.title}: level {level.id} selected", 4000)

    def closeEvent(self, event: QCloseEvent) -> None:
        logger.info("Closing CourseDeck")
        super().closeEvent(event)
