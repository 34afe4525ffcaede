"""Post-parse processing of inventory data.

Parsed stores flow through :mod:`~inventorywatch.ingestion.filter` into a
:class:`~inventorywatch.models.PollResult`, and from there into
:mod:`~inventorywatch.ingestion.notification` for the user-facing summary.
"""
