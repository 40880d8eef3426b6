"""Promotion dialog — lets the user pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from rookery.core.enums import PROMOTION_CHOICES, Color, PieceType
from rookery.core.piece import piece_symbol
from rookery.game.interfaces import IPromotionChooser


class PromotionDialog(QDialog):
    """Modal dialog to select promotion piece type."""

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Promotion")
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected: PieceType | None = None
        self._buttons: dict[PieceType, QPushButton] = {}

        layout = QVBoxLayout(self)
        label = QLabel("Promotion piece type")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)

        btn_row = QHBoxLayout()
        for pt in PROMOTION_CHOICES:
            btn = QPushButton(piece_symbol(color, pt))
            btn.setFont(QFont("", 28))
            btn.setFixedSize(68, 68)
            btn.setToolTip(pt.name.capitalize())
            btn.clicked.connect(lambda checked, p=pt: self._choose(p))
            btn_row.addWidget(btn)
            self._buttons[pt] = btn

        layout.addLayout(btn_row)

    def _choose(self, piece_type: PieceType) -> None:
        self._selected = piece_type
        self.accept()

    def button(self, piece_type: PieceType) -> QPushButton:
        return self._buttons[piece_type]

    @property
    def selected(self) -> PieceType | None:
        return self._selected

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceType | None:
        """Show the dialog and return the chosen piece type, or ``None`` on cancel."""
        dlg = PromotionDialog(color, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None


class DialogPromotionChooser(IPromotionChooser):
    """Promotion chooser backed by :class:`PromotionDialog`.

    A cancelled dialog is shown again: a promotion must always resolve.
    """

    __slots__ = ("_parent",)

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def choose_promotion(self, color: Color) -> PieceType:
        while True:
            choice = PromotionDialog.ask(color, self._parent)
            if choice is not None:
                return choice
