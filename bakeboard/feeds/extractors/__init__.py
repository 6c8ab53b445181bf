"""Source adapters: one sub-package per upstream API.

Each adapter translates one upstream schema into the normalized records
of `bakeboard.feeds.aggregation.schemas`.
"""
