"""
Scheduler lab package.

Simulates non-preemptive CPU scheduling (Shortest Job First and Priority
with aging) over generated or file-supplied workloads and reports
per-process and average timing metrics.
"""

__all__ = ["cli", "engine", "policies", "models", "metrics", "workload", "workload_io"]
