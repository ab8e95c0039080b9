"""Routers package — HTTP endpoint definitions.

Files:
  v1/assignments.py — Seller assignments (/api/v1/assignments/*)
  v1/dashboard.py   — Windowed balances and upcoming events (/api/v1/dashboard/*)
  v1/ledger.py      — Deliveries, allocations, payments, audits
  v1/events.py      — Scheduled customer events (/api/v1/events)
  v1/reference.py   — Joints, sellers, suppliers (/api/v1/reference/*)
"""
