# src/vector_kit/observability/names.py

"""Standard metric names for vector-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Vector Store Metrics (in-memory exhaustive scan)
# ============================================================================

# Duration
STORE_INSERT_DURATION = "vector_store_insert_duration"
STORE_SEARCH_DURATION = "vector_store_search_duration"

# Counters
STORE_OPERATIONS_TOTAL = "vector_store_operations_total"
STORE_ERRORS_TOTAL = "vector_store_errors_total"
# Records excluded from a search because their dimensionality differs from the query
STORE_SKIPPED_RECORDS_TOTAL = "vector_store_skipped_records_total"

# Gauges
STORE_RECORDS = "vector_store_records"
STORE_SCANNED_RECORDS = "vector_store_scanned_records"


# ============================================================================
# Embeddings Metrics
# ============================================================================

# Duration
EMBEDDINGS_DURATION = "embeddings_duration"

# Counters
EMBEDDINGS_REQUESTS_TOTAL = "embeddings_requests_total"
EMBEDDINGS_ERRORS_TOTAL = "embeddings_errors_total"

# Gauges
EMBEDDINGS_BATCH_SIZE = "embeddings_batch_size"


# ============================================================================
# Text Search Metrics
# ============================================================================

# Duration
TEXT_SEARCH_INDEX_DURATION = "text_search_index_duration"
TEXT_SEARCH_QUERY_DURATION = "text_search_query_duration"
