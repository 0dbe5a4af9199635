"""Top-level package for the Grade Matrix toolkit.

Provides subpackages:
- grade_matrix.core – grade models, schema validation, serialization
- grade_matrix.aggregation – totals, percentages and released averages
- grade_matrix.exchange – CSV export and import
- grade_matrix.pagination – alphabetical page labels
- grade_matrix.store – collaborator interfaces and the gradebook file
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("grade-matrix")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
