"""Source-level checks on the led_portfolio package.

Storage keys must stay private to the repositories, library code logs
instead of printing, and the public exports resolve.
"""

import ast
import pathlib

import pytest

import led_portfolio
from led_portfolio import repositories
from led_portfolio.repositories import (
    InquiryRepository,
    PortfolioCacheRepository,
    ProjectRepository,
    SettingsRepository,
)

SRC_ROOT = pathlib.Path(__file__).resolve().parent.parent / "src" / "led_portfolio"
SOURCE_FILES = sorted(SRC_ROOT.rglob("*.py"))

STORAGE_KEYS = {
    ProjectRepository.storage_key,
    repositories.TestimonialRepository.storage_key,
    InquiryRepository.storage_key,
    PortfolioCacheRepository.storage_key,
    *SettingsRepository.storage_keys.values(),
}


def _string_constants(path: pathlib.Path) -> set[str]:
    tree = ast.parse(path.read_text())
    return {
        node.value
        for node in ast.walk(tree)
        if isinstance(node, ast.Constant) and isinstance(node.value, str)
    }


class TestStorageKeys:
    """Verify stringly-typed store access is confined to repositories.py."""

    def test_keys_defined_in_repositories(self) -> None:
        constants = _string_constants(SRC_ROOT / "repositories.py")
        assert STORAGE_KEYS <= constants

    @pytest.mark.parametrize(
        "path",
        [p for p in SOURCE_FILES if p.name != "repositories.py"],
        ids=lambda p: str(p.relative_to(SRC_ROOT)),
    )
    def test_no_key_literals_elsewhere(self, path: pathlib.Path) -> None:
        assert not (STORAGE_KEYS & _string_constants(path))


class TestNoPrint:
    """Library modules report through logging or rich, never bare print()."""

    @pytest.mark.parametrize(
        "path", SOURCE_FILES, ids=lambda p: str(p.relative_to(SRC_ROOT))
    )
    def test_no_builtin_print(self, path: pathlib.Path) -> None:
        tree = ast.parse(path.read_text())
        calls = [
            node.lineno
            for node in ast.walk(tree)
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "print"
        ]
        assert calls == [], f"print() at lines {calls}"


class TestPackageExports:
    """Verify the top-level exports resolve."""

    def test_all_names_importable(self) -> None:
        for name in led_portfolio.__all__:
            assert hasattr(led_portfolio, name), name

    def test_version(self) -> None:
        assert led_portfolio.__version__ == "0.1.0"


class TestNoCollectionMarkers:
    """Library classes carry no test-runner attributes."""

    @pytest.mark.parametrize(
        "path", SOURCE_FILES, ids=lambda p: str(p.relative_to(SRC_ROOT))
    )
    def test_no_dunder_test(self, path: pathlib.Path) -> None:
        tree = ast.parse(path.read_text())
        names = [
            target.id
            for node in ast.walk(tree)
            if isinstance(node, ast.Assign)
            for target in node.targets
            if isinstance(target, ast.Name)
        ]
        assert "__test__" not in names
