"""
fleet_records.api

HTTP surface consumed by the fleet UI. Entities travel under their wire field
names (`cuña_*` included); domain errors become 404/409/422/503 responses.
"""
