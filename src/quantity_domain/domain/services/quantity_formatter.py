"""Human-readable rendering of dual-unit quantities."""

from src.quantity_domain.domain.entities.stock_aggregate import StockCounter


def format_quantity_display(boxes: int, pieces: int, include_total: bool = True, pieces_per_box: int = 1) -> str:
    """
    Formats a quantity such as "2 bx + 1 pc (13 pcs)".

    A side that is zero is left out ("3 bx (12 pcs)", "1 pc (1 pcs)"); an
    entirely empty quantity reads "0 pc".
    """
    parts = []
    if boxes > 0:
        parts.append(f"{boxes} bx")
    if pieces > 0:
        parts.append(f"{pieces} pc")
    result = " + ".join(parts) or "0 pc"

    if include_total:
        total = boxes * pieces_per_box + pieces
        result += f" ({total} pcs)"
    return result


def format_counter(counter: StockCounter | None) -> str:
    """Compact list-view form of a stored counter: "2 bx 3 pcs" or "2 bx"."""
    if counter is None:
        return "0 bx"
    if counter.pieces > 0:
        return f"{counter.boxes} bx {counter.pieces} pcs"
    return f"{counter.boxes} bx"
