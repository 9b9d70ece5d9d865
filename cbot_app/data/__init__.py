"""
Feed entry parsing and snapshot aggregation.

Turns raw cache values into typed quotes, resolves the dollar and euro
records, orders and deduplicates contract curves, and assembles the JSON
snapshot.
"""
