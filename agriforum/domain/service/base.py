"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the forum rules that span several repositories, such as
    keeping post counters equal to the vote ledger and comment table.
    """
