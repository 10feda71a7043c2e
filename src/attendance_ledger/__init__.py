"""Attendance Ledger package.

A permissioned attendance ledger organized by feature modules (roles,
attendance, transfers, ...) with a thin Flask controller layer on top of
service/repository layers.
"""

__version__ = "0.1.0"
