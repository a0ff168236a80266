"""
fleet_records.account_clients

Clients for third-party account APIs.

Responsibilities:
- Isolate outbound HTTP calls that only diagnostics depend on.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing under `db` or `services` imports from here; entity CRUD keeps working
# when the account API is unreachable.
