"""BakeBoard feeds: release and charts aggregation from media APIs.

Subpackages:
    http: rate limiter, TTL cache, tolerant join, fetch client
    extractors: one client + normalizer per upstream source
    aggregation: schemas, pipelines, ordering, dismissal
    utils: logging and release window arithmetic
"""
