"""
Prometheus metrics for the license key service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Action metrics
actions_total = Counter(
    "actions_total",
    "Total dispatched actions",
    ["action", "success"],
)

# Application metrics
applications_created_total = Counter(
    "applications_created_total",
    "Total applications created",
)

applications_deleted_total = Counter(
    "applications_deleted_total",
    "Total applications deleted",
)

# Key metrics
keys_issued_total = Counter(
    "keys_issued_total",
    "Total keys issued",
)

keys_banned_total = Counter(
    "keys_banned_total",
    "Total ban operations",
)

keys_deleted_total = Counter(
    "keys_deleted_total",
    "Total keys deleted",
)

hwid_resets_total = Counter(
    "hwid_resets_total",
    "Total HWID resets",
)

key_validations_total = Counter(
    "key_validations_total",
    "Total key validations by outcome",
    ["reason"],
)

devices_bound_total = Counter(
    "devices_bound_total",
    "Total HWIDs bound to keys",
)

# Support staff metrics
support_grants_changed_total = Counter(
    "support_grants_changed_total",
    "Support grants added or removed",
    ["change"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
