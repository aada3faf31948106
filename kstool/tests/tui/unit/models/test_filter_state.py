"""Tests for filter state."""

from __future__ import annotations

import dataclasses

import pytest

from kstool.constants.enums import SortMode, StatusFilter
from kstool.models.state.filter_state import FilterState


class TestFilterState:
    """Tests for FilterState transitions."""

    def test_defaults(self) -> None:
        state = FilterState()
        assert state.status_filter is StatusFilter.ALL
        assert state.owner_only is False
        assert state.sort_mode is SortMode.AGE_DESC

    def test_transitions_return_new_states(self) -> None:
        state = FilterState()

        assert state.with_next_status().status_filter is StatusFilter.RUNNING
        assert state.with_next_sort().sort_mode is SortMode.AGE_ASC
        assert state.with_owner_toggled().owner_only is True
        assert state == FilterState()

    def test_transitions_are_independent(self) -> None:
        state = FilterState().with_owner_toggled().with_next_status()

        assert state.owner_only is True
        assert state.status_filter is StatusFilter.RUNNING
        assert state.sort_mode is SortMode.AGE_DESC

    def test_toggle_twice_restores(self) -> None:
        state = FilterState()
        assert state.with_owner_toggled().with_owner_toggled() == state

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            FilterState().owner_only = True  # type: ignore[misc]
