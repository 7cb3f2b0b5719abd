"""Logical keys of the local store."""

CACHE_PREFIX = "analysisCache:"
ANALYSIS_HISTORY = "analysisHistory"
CLIENTS = "clients"
PERFORMANCE_DATA = "performanceData"
PROCESSED_REPORT_HASHES = "processedReportHashes"
CURRENT_CLIENT_ID = "currentClientId"
DB_CONFIG = "dbConfig"
DB_STATUS = "dbStatus"


def cache_key(content_hash: str, client_id: str, language: str, format_group: str) -> str:
    """analysisCache:{hash}-{clientId}-{lang}-{format}"""
    return f"{CACHE_PREFIX}{content_hash}-{client_id}-{language}-{format_group}"
