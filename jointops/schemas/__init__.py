"""Pydantic schemas package.

Folder intent:
  common.py      — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  assignment.py  — seller assignment requests and resolved bindings
  dashboard.py   — balances, activity feed, upcoming events
  ledger.py      — deliveries, allocations, payments, audits
  event.py       — scheduled events with pricing
  reference.py   — joints, sellers, suppliers
"""
