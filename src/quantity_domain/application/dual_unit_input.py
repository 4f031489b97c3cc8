# src/quantity_domain/application/dual_unit_input.py
"""Interaction state for a quantity field that accepts either boxes or pieces."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from src.common.dtos.quantity_dtos import QuantityChangeDTO
from src.common.exceptions.custom_exceptions import QuantityValidationError
from src.common.utils.number_utils import coerce_entry
from src.quantity_domain.domain.services.quantity_formatter import format_quantity_display
from src.quantity_domain.domain.services.unit_converter import (
    BOXES,
    PIECES,
    UNIT_TYPES,
    ensure_pieces_per_box,
    from_boxes_entry,
    from_pieces_entry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptyEntry:
    """Nothing typed yet in the field of the active mode."""

    mode: str


@dataclass(frozen=True)
class BoxesEntry:
    raw: str

    @property
    def mode(self) -> str:
        return BOXES


@dataclass(frozen=True)
class PiecesEntry:
    raw: str

    @property
    def mode(self) -> str:
        return PIECES


# Only the active mode ever holds text, so switching modes cannot leave stale input behind.
EntryState = Union[EmptyEntry, BoxesEntry, PiecesEntry]

ChangeListener = Callable[[Optional[QuantityChangeDTO]], None]
TypeListener = Callable[[str], None]


def _entry_for(mode: str, raw: str) -> EntryState:
    if not raw.strip():
        return EmptyEntry(mode)
    if mode == BOXES:
        return BoxesEntry(raw)
    return PiecesEntry(raw)


class DualUnitInput:
    """
    Lets a user type a quantity in boxes or in pieces and reports one normalized value.

    The owner passes `on_change`, which receives a QuantityChangeDTO after every
    edit that yields a positive quantity and None after every edit that does
    not (blank, zero, negative or unparseable text). `on_type_change` receives
    the new mode whenever the unit changes. `max_boxes`/`max_pieces` are only
    shown as hints; they are never enforced here.
    """

    def __init__(
        self,
        pieces_per_box: int,
        value: Optional[int] = None,
        input_type: str = BOXES,
        on_change: Optional[ChangeListener] = None,
        on_type_change: Optional[TypeListener] = None,
        max_boxes: Optional[int] = None,
        max_pieces: Optional[int] = None,
    ) -> None:
        self.pieces_per_box = ensure_pieces_per_box(pieces_per_box)
        self._check_mode(input_type)
        self.on_change = on_change or (lambda value: None)
        self.on_type_change = on_type_change or (lambda mode: None)
        self.max_boxes = max_boxes
        self.max_pieces = max_pieces

        self._state: EntryState = EmptyEntry(input_type)
        self._value: Optional[int] = None
        self._last_emitted: Optional[QuantityChangeDTO] = None
        if value is not None:
            self.set_value(value)

    @staticmethod
    def _check_mode(mode: str) -> None:
        if mode not in UNIT_TYPES:
            raise QuantityValidationError(f"Unknown unit mode {mode!r}; expected one of {UNIT_TYPES}")

    @property
    def state(self) -> EntryState:
        return self._state

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def raw_text(self) -> str:
        """Text of the field for the active mode."""
        return getattr(self._state, "raw", "")

    @property
    def boxes_text(self) -> str:
        return self.raw_text if self.mode == BOXES else ""

    @property
    def pieces_text(self) -> str:
        return self.raw_text if self.mode == PIECES else ""

    @property
    def quantity(self) -> Optional[QuantityChangeDTO]:
        """The normalized quantity the current text stands for, or None."""
        number = coerce_entry(self.raw_text)
        if number is None:
            return None
        if self.mode == BOXES:
            converted = from_boxes_entry(number, self.pieces_per_box)
        else:
            converted = from_pieces_entry(number, self.pieces_per_box)
        return QuantityChangeDTO(
            type=self.mode,
            boxes=converted.boxes,
            pieces=converted.pieces,
            total_pieces=converted.total_pieces,
        )

    @property
    def preview(self) -> str:
        quantity = self.quantity
        if quantity is None:
            return ""
        return format_quantity_display(quantity.boxes, quantity.pieces, True, self.pieces_per_box)

    @property
    def hint(self) -> str:
        if self.mode == BOXES and self.max_boxes:
            return f"Max: {self.max_boxes} boxes"
        if self.mode == PIECES and self.max_pieces:
            return f"Max: {self.max_pieces} pieces"
        return ""

    @property
    def exceeds_max(self) -> bool:
        """Advisory only; callers decide whether to block submission."""
        quantity = self.quantity
        if quantity is None:
            return False
        if self.mode == BOXES and self.max_boxes:
            return quantity.boxes > self.max_boxes
        if self.mode == PIECES and self.max_pieces:
            return quantity.total_pieces > self.max_pieces
        return False

    def select_mode(self, mode: str) -> None:
        """Switches unit. Whatever was typed for the previous unit is discarded."""
        self._check_mode(mode)
        if mode == self.mode:
            return

        self._state = _entry_for(mode, self._raw_for_value(mode))
        logger.debug(f"Quantity input switched to {mode}")
        self.on_type_change(mode)

        quantity = self.quantity
        if quantity != self._last_emitted:
            self._emit(quantity)

    def enter_text(self, raw: Optional[str]) -> None:
        """The user edited the field of the active mode."""
        # Typing supersedes any value the owner pushed earlier
        self._value = None
        self._state = _entry_for(self.mode, raw or "")
        quantity = self.quantity
        if quantity is None and self.raw_text:
            logger.debug(f"Ignoring non-positive or unparseable quantity text {self.raw_text!r}")
        self._emit(quantity)

    def set_value(self, total_pieces: Optional[int]) -> None:
        """
        Owner pushes a canonical quantity in pieces, e.g. to prefill an edit form.

        The field text is re-derived for the active mode. A piece count that is
        not a whole number of boxes cannot be shown in boxes mode, so the input
        moves to pieces mode instead of dropping the remainder.
        """
        self._value = total_pieces
        previous_mode = self.mode
        mode = previous_mode
        if mode == BOXES and total_pieces and total_pieces % self.pieces_per_box:
            mode = PIECES
        self._state = _entry_for(mode, self._raw_for_value(mode))
        self._last_emitted = self.quantity
        if mode != previous_mode:
            self.on_type_change(mode)

    def _raw_for_value(self, mode: str) -> str:
        if not self._value or self._value <= 0:
            return ""
        if mode == BOXES:
            if self._value % self.pieces_per_box:
                return ""
            return str(self._value // self.pieces_per_box)
        return str(self._value)

    def _emit(self, quantity: Optional[QuantityChangeDTO]) -> None:
        self._last_emitted = quantity
        self.on_change(quantity)
