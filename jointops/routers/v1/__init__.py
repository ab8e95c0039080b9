"""v1 router package — all /api/v1/* endpoints live here.

Files:
  assignments.py  — seller assignment resolution and reassignment
  dashboard.py    — windowed balances, activity feed, upcoming events
  ledger.py       — deliveries, allocations, payments, audits
  events.py       — scheduled customer events
  reference.py    — joints, sellers, suppliers

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to jointops/services/.
"""
