"""Prometheus metrics for ProductLens.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram, Gauge

# Catalog metrics
catalog_imports_total = Counter(
    "productlens_catalog_imports_total",
    "Total catalog import attempts",
    ["source", "status"]  # source: upload|remote, status: success|empty|error
)

catalog_size = Gauge(
    "productlens_catalog_size",
    "Number of products in the active catalog"
)

# Matching metrics
match_requests_total = Counter(
    "productlens_match_requests_total",
    "Total match requests",
    ["input", "status"]  # input: image|description, status: matched|no_match|vision_error
)

match_results = Histogram(
    "productlens_match_results",
    "Number of ranked results returned per match request",
    buckets=[0, 1, 2, 3, 4, 5, 10, 20]
)

# AI call metrics
vision_calls_total = Counter(
    "productlens_vision_calls_total",
    "Total AI provider calls",
    ["call_type", "provider", "status"]  # call_type: identify|translate
)

vision_latency_ms = Histogram(
    "productlens_vision_latency_ms",
    "AI provider call latency in milliseconds",
    ["call_type", "provider"],
    buckets=[50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000]
)
