"""Services package — all business logic lives here, never in routers.

Files:
  assignments.py     — AssignmentResolver: who is authorized at which joint, and when
  reconciliation.py  — ReconciliationEngine: windowed balances, activity feed, upcoming events
  ledger.py          — deliveries / allocations / payments / audits writes and reports
  events.py          — scheduled customer events with pricing
  reference.py       — joints, sellers, suppliers; seller PINs

Rule: routers call services, services call the store, the store calls the DB.
      No SQLAlchemy queries in services. No FastAPI imports in services.
"""
