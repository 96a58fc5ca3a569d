"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations of ``BankPort`` (the httpx-backed REST
    adapter and an in-memory mock) together with the shared transport errors.

Dependencies:
    ``httpx`` for async HTTP; domain protocol definitions.

Call context:
    Imported by app composition modules (runtime wiring) and by tests (mocks
    and transport-level behavior verification).
"""
