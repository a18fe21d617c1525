"""Request performance instrumentation and liveness reporting.

Everything here is process-local: a bounded in-memory log of request timings,
psutil-backed memory/uptime probes, structlog setup and the health report.
"""
