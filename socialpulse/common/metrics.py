"""Prometheus metrics for monitoring."""
from prometheus_client import Counter, Histogram

# Fetch metrics
fetch_requests_total = Counter(
    'fetch_requests_total',
    'Total number of platform fetch requests',
    ['platform', 'status']
)

fetch_duration_seconds = Histogram(
    'fetch_duration_seconds',
    'Time spent fetching comments',
    ['platform']
)

comments_collected_total = Counter(
    'comments_collected_total',
    'Total number of comments collected',
    ['platform', 'source']
)

# Processing metrics
comments_processed_total = Counter(
    'comments_processed_total',
    'Total number of comments processed',
    ['status']
)

processing_duration_seconds = Histogram(
    'processing_duration_seconds',
    'Time spent classifying and tagging a batch of comments'
)

# Analytics metrics
analytics_requests_total = Counter(
    'analytics_requests_total',
    'Total number of analysis requests by cache outcome',
    ['cache']
)

analytics_duration_seconds = Histogram(
    'analytics_duration_seconds',
    'Time spent aggregating analytics'
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total number of errors',
    ['component', 'error_type']
)
