"""Optional integrations with external services.

Each integration lives in its own subpackage and needs its extra installed:
- ``ledgerline.integrations.mongodb`` (``ledgerline[mongodb]``)
- ``ledgerline.integrations.otel`` (``ledgerline[otel]``)
"""
