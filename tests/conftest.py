import pytest


@pytest.fixture
def write_csv(tmp_path):
    """Write *text* to a CSV file under tmp_path and return its path."""
    def _write(text, name="data.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return str(path)
    return _write
