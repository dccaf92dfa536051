#!/usr/bin/env python3
"""
Performance Monitor for Leanpub Login Automation

Times each workflow step and samples process memory around it, then logs a
short summary at the end of the run.
"""

import time
import psutil
import logging
import inspect
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
from contextlib import asynccontextmanager
from functools import wraps

logger = logging.getLogger(__name__)


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single workflow step"""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    memory_before: float
    memory_after: float
    memory_delta: float
    success: bool
    error_message: Optional[str] = None
    additional_data: Dict[str, Any] = field(default_factory=dict)


class PerformanceMonitor:
    """Collects PerformanceMetrics for the steps of one workflow run"""

    def __init__(self, enable_monitoring: bool = True, slow_step_threshold: float = 5.0):
        self.enable_monitoring = enable_monitoring
        self.slow_step_threshold = slow_step_threshold  # seconds
        self.operation_metrics: List[PerformanceMetrics] = []

    @asynccontextmanager
    async def measure_async_operation(self, operation_name: str, additional_data: Dict[str, Any] = None):
        """Async context manager for measuring a step"""
        if not self.enable_monitoring:
            yield
            return

        start_time = time.time()
        memory_before = self._get_current_memory_usage()
        success = True
        error_message = None

        try:
            yield
        except Exception as e:
            success = False
            error_message = str(e)
            raise
        finally:
            end_time = time.time()
            memory_after = self._get_current_memory_usage()

            metric = PerformanceMetrics(
                operation_name=operation_name,
                start_time=start_time,
                end_time=end_time,
                duration=end_time - start_time,
                memory_before=memory_before,
                memory_after=memory_after,
                memory_delta=memory_after - memory_before,
                success=success,
                error_message=error_message,
                additional_data=additional_data or {}
            )
            self.operation_metrics.append(metric)

            logger.debug(f"Step {operation_name} took {metric.duration:.2f}s")
            if metric.duration > self.slow_step_threshold:
                logger.info(f"Performance: {operation_name} took {metric.duration:.2f}s, "
                            f"memory delta: {metric.memory_delta:.2f}MB")

    def _get_current_memory_usage(self) -> float:
        """Get current memory usage in MB"""
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error:
            return 0.0

    def get_performance_summary(self) -> Dict[str, Any]:
        """Get a summary of the steps measured so far"""
        if not self.operation_metrics:
            return {}

        total_operations = len(self.operation_metrics)
        successful_operations = sum(1 for m in self.operation_metrics if m.success)
        total_duration = sum(m.duration for m in self.operation_metrics)
        slowest = max(self.operation_metrics, key=lambda m: m.duration)

        return {
            'total_operations': total_operations,
            'successful_operations': successful_operations,
            'total_duration': total_duration,
            'average_duration': total_duration / total_operations,
            'slowest_operation': slowest.operation_name,
            'memory_peak_mb': max(m.memory_after for m in self.operation_metrics),
        }

    def log_performance_summary(self):
        summary = self.get_performance_summary()
        if not summary:
            return
        logger.info(
            f"Performance summary: {summary['successful_operations']}/{summary['total_operations']} steps ok, "
            f"total {summary['total_duration']:.2f}s, slowest: {summary['slowest_operation']}, "
            f"memory peak: {summary['memory_peak_mb']:.2f}MB"
        )

    def reset_monitoring(self):
        self.operation_metrics.clear()


def performance_monitor(operation_name: str = None, additional_data: Dict[str, Any] = None):
    """
    Decorator for measuring coroutine steps
    Usage: @performance_monitor("operation_name") on a method of an object
    that exposes a ``performance_monitor`` attribute.
    """
    def decorator(func):
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"performance_monitor expects a coroutine function, got {func.__name__}")

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            # Try to get monitor instance from args or kwargs
            monitor = None
            for arg in list(args) + list(kwargs.values()):
                if isinstance(getattr(arg, 'performance_monitor', None), PerformanceMonitor):
                    monitor = arg.performance_monitor
                    break

            if monitor:
                async with monitor.measure_async_operation(operation_name or func.__name__, additional_data):
                    return await func(*args, **kwargs)
            return await func(*args, **kwargs)

        return async_wrapper

    return decorator
