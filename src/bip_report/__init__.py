"""Client, result table and page cursor for BI Publisher SQL reports."""

# Submodules are imported directly, e.g.:
# from bip_report.connections import Connection, ConnectionStore
# from bip_report.client import ReportClient
# from bip_report.session import ReportSession
# from bip_report.server import main

__all__ = [
    "client",
    "config",
    "connections",
    "errors",
    "guardrails",
    "paginator",
    "render",
    "session",
    "table",
]
