"""ViewModel package for dashboard UI state.

Call context:
    ``findash/web_ui/main.py`` feeds controller state into these viewmodels
    and renders the rows they produce.

Dependencies:
    Modules in this package depend on domain types, ``SectionState`` and
    formatting helpers only. I/O adapters and orchestration remain outside.
"""
