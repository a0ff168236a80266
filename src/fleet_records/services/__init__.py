"""
fleet_records.services

Flows that span more than one table: relationship orchestration and the wipe.
"""
