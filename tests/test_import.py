"""Verify package imports work correctly."""


def test_import_statelex() -> None:
    """Test that statelex can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import statelex

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert statelex.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from statelex import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api_exported() -> None:
    import statelex

    for name in statelex.__all__:
        assert hasattr(statelex, name), name


def test_logger_namespace() -> None:
    from statelex.utils import get_logger

    assert get_logger("custom").name == "statelex.custom"
    assert get_logger("statelex.lexer").name == "statelex.lexer"
