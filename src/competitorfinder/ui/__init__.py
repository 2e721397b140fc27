"""Client-side controllers mirroring the browser UI."""

from __future__ import annotations

from .client import ProxyClient  # noqa: F401
from .result_card import CardState, ResultCardController  # noqa: F401
from .result_list import ResultListView, render_result_list  # noqa: F401
from .search_form import SearchFormController, SearchState  # noqa: F401

__all__ = [
    "CardState",
    "ProxyClient",
    "ResultCardController",
    "ResultListView",
    "SearchFormController",
    "SearchState",
    "render_result_list",
]
