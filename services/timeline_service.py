from models.projection_dto import DateWindow
from services.invoice_mapper import invoice_events
from services.kpi_service import calculate_date_range
from services.occurrence_generator import generate_all
from services.period_aggregator import group_by_date, sort_events
from services.projection_service import load_inputs


def build_timeline(transactions, invoices, window: DateWindow, *, cards=(), exceptions=None) -> dict:
    """Materialize the dated events of a window, sorted and grouped by day.

    Recomputed on every call; nothing is stored.
    """
    warnings = []
    events = list(generate_all(transactions, window, exceptions, warnings))
    events.extend(invoice_events(invoices, cards, window, warnings))

    return {
        "events": sort_events(events),
        "grouped": group_by_date(events),
        "date_range": {"start": window.start, "end": window.end},
        "warnings": warnings,
    }


def get_timeline(period="current", custom_start=None, custom_end=None, today=None) -> dict:
    window = calculate_date_range(period, custom_start, custom_end, today)
    inputs = load_inputs()
    return build_timeline(
        inputs.transactions, inputs.invoices, window,
        cards=inputs.cards, exceptions=inputs.exceptions,
    )
