"""
Performance monitoring and metrics.

Track upstream API reliability, search latency per domain and cache
efficiency.
"""

import time
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "APIMetrics",
    "PerformanceMonitor",
    "get_api_metrics",
    "get_performance_monitor",
    "format_metrics_report",
]

# ══════════════════════════════════════════════════════════════════════════════
# Metrics Classes
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class APIMetrics:
    """Track upstream fetch statistics."""

    total_calls: int = 0
    successful_calls: int = 0
    failed_calls: int = 0
    retry_count: int = 0
    total_latency_ms: float = 0.0
    error_types: dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_calls == 0:
            return 0.0
        return (self.successful_calls / self.total_calls) * 100

    @property
    def avg_latency_ms(self) -> float:
        if self.successful_calls == 0:
            return 0.0
        return self.total_latency_ms / self.successful_calls

    def record_success(self, latency_ms: float):
        self.total_calls += 1
        self.successful_calls += 1
        self.total_latency_ms += latency_ms

    def record_failure(self, error_type: str):
        self.total_calls += 1
        self.failed_calls += 1
        self.error_types[error_type] = self.error_types.get(error_type, 0) + 1

    def record_retry(self):
        self.retry_count += 1


@dataclass
class PerformanceMonitor:
    """Track search performance per domain (quran, hadith)."""

    start_time: float = field(default_factory=time.time)
    search_times: dict[str, list[float]] = field(default_factory=dict)
    cache_hits: int = 0
    cache_misses: int = 0
    total_results: int = 0
    failed_documents: int = 0

    def record_search(self, domain: str, duration_seconds: float, result_count: int = 0):
        self.search_times.setdefault(domain, []).append(duration_seconds)
        self.total_results += result_count

    def record_cache_hit(self):
        self.cache_hits += 1

    def record_cache_miss(self):
        self.cache_misses += 1

    def record_failed_document(self):
        self.failed_documents += 1

    @property
    def total_searches(self) -> int:
        return sum(len(times) for times in self.search_times.values())

    def avg_search_time_ms(self, domain: str) -> float:
        times = self.search_times.get(domain)
        if not times:
            return 0.0
        return (sum(times) / len(times)) * 1000

    @property
    def cache_hit_rate(self) -> float:
        total = self.cache_hits + self.cache_misses
        if total == 0:
            return 0.0
        return (self.cache_hits / total) * 100

    @property
    def uptime_seconds(self) -> float:
        return time.time() - self.start_time

    def summary(self) -> dict[str, Any]:
        return {
            "uptime_seconds": round(self.uptime_seconds, 1),
            "total_searches": self.total_searches,
            "avg_search_time_ms": {
                domain: round(self.avg_search_time_ms(domain), 0)
                for domain in self.search_times
            },
            "cache_hit_rate": round(self.cache_hit_rate, 1),
            "total_results": self.total_results,
            "failed_documents": self.failed_documents,
        }


# ══════════════════════════════════════════════════════════════════════════════
# Global Instances
# ══════════════════════════════════════════════════════════════════════════════

_api_metrics = APIMetrics()
_perf_monitor = PerformanceMonitor()


def get_api_metrics() -> APIMetrics:
    return _api_metrics


def get_performance_monitor() -> PerformanceMonitor:
    return _perf_monitor


def format_metrics_report(
    perf: PerformanceMonitor | None = None, api: APIMetrics | None = None
) -> str:
    """Generate human-readable metrics report."""
    perf = perf or _perf_monitor
    api = api or _api_metrics

    lines = [
        "# Performance Metrics",
        "",
        "## Search",
        f"- Uptime: {perf.uptime_seconds:.0f}s",
        f"- Total Searches: {perf.total_searches}",
    ]
    for domain in sorted(perf.search_times):
        lines.append(
            f"- Avg {domain.title()} Search Time: {perf.avg_search_time_ms(domain):.0f}ms"
        )
    lines.extend(
        [
            f"- Cache Hit Rate: {perf.cache_hit_rate:.1f}%",
            f"- Results Returned: {perf.total_results}",
            f"- Documents Skipped (fetch failed): {perf.failed_documents}",
            "",
            "## Content API Reliability",
            f"- Success Rate: {api.success_rate:.1f}%",
            f"- Total Calls: {api.total_calls}",
            f"- Failed: {api.failed_calls}",
            f"- Retries: {api.retry_count}",
            f"- Avg Latency: {api.avg_latency_ms:.0f}ms",
        ]
    )

    if api.error_types:
        lines.append("")
        lines.append("## Errors")
        for err, count in sorted(api.error_types.items(), key=lambda x: -x[1]):
            lines.append(f"- {err}: {count}")

    return "\n".join(lines)
