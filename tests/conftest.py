from __future__ import annotations

import os
from pathlib import Path

import pytest

_LIVE_ADDRESSES_ENV = "ES_DOCSTORE_TEST_ADDRESSES"


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            p = Path(str(item.fspath)).resolve()
        except Exception:  # noqa: S112
            continue

        if p == target_dir or target_dir in p.parents:
            item.add_marker(getattr(pytest.mark, marker))


def _skip_live_tests_without_cluster(items: list[pytest.Item]) -> None:
    if os.getenv(_LIVE_ADDRESSES_ENV):
        return

    skip_live = pytest.mark.skip(reason=f"Set {_LIVE_ADDRESSES_ENV} to run tests against a live cluster")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")
    _skip_live_tests_without_cluster(items)
