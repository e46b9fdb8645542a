"""
Integration Tests - Monitor Lifecycle and End-to-End Flows.

These tests drive a full PerformanceMonitor through host channels and a
manual scheduler.
"""
