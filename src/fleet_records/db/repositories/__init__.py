"""
fleet_records.db.repositories

One repository per table. Each holds the whitelist of settable fields for its
entity; cross-entity flows live in `fleet_records.services`.
"""
