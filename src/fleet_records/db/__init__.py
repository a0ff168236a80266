"""
fleet_records.db

Schema, engine setup, the query executor and the per-entity repositories.
"""


# --- Module Notes -----------------------------------------------------------
# Services depend on repositories and the executor, never on engines or sessions.
