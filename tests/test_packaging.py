import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def test_project_metadata_does_not_ship_internal_docs():
    project = tomllib.loads(PYPROJECT.read_text())["project"]
    assert "readme" not in project
    assert {"pydantic>=2.5", "pydantic-settings>=2.1"} <= set(project["dependencies"])
