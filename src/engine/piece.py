from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    """Side of a piece. Light starts on rows 0-2 and moves up the board."""

    LIGHT = "w"
    DARK = "b"

    def opposite(self) -> "Color":
        return Color.DARK if self is Color.LIGHT else Color.LIGHT

    @property
    def forward(self) -> int:
        """Row delta of a man's forward step."""
        return 1 if self is Color.LIGHT else -1

    @property
    def back_rank(self) -> int:
        """Row on which a man of this color is promoted."""
        return 7 if self is Color.LIGHT else 0

    @property
    def label(self) -> str:
        return "White" if self is Color.LIGHT else "Black"


class PieceType(Enum):
    MAN = "man"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    """A draughts piece.

    Attributes:
        color (Color): Owning side.
        type (PieceType): ``MAN`` until promoted, then ``KING``.
    """

    color: Color
    type: PieceType = PieceType.MAN

    @property
    def is_king(self) -> bool:
        return self.type is PieceType.KING

    def promoted(self) -> "Piece":
        return Piece(self.color, PieceType.KING)

    def demoted(self) -> "Piece":
        return Piece(self.color, PieceType.MAN)

    @property
    def symbol(self) -> str:
        """Single-character symbol: ``w``/``W`` for light, ``b``/``B`` for dark."""
        ch = self.color.value
        return ch.upper() if self.is_king else ch

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Parse a piece symbol.

        Raises:
            ValueError: If ``ch`` is not one of ``w W b B``.
        """
        if ch not in SYMBOL_TO_PIECE:
            raise ValueError(f"invalid piece symbol: {ch!r}")
        return SYMBOL_TO_PIECE[ch]

    def __str__(self) -> str:
        return f"{self.color.label} {self.type.value}"


LIGHT_MAN = Piece(Color.LIGHT, PieceType.MAN)
LIGHT_KING = Piece(Color.LIGHT, PieceType.KING)
DARK_MAN = Piece(Color.DARK, PieceType.MAN)
DARK_KING = Piece(Color.DARK, PieceType.KING)

SYMBOL_TO_PIECE = {p.symbol: p for p in (LIGHT_MAN, LIGHT_KING, DARK_MAN, DARK_KING)}
