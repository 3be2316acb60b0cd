import logging

import pytest


def pytest_configure(config):
    # Configure logging so that reader messages show up in failing tests
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s: %(message)s'
    )


@pytest.fixture
def mps_file(tmp_path):
    """
    Factory writing MPS content to a file (compressed when the name asks for it)
    and returning its path.
    """
    from mipdd.utils import get_opener

    def _write(content, name="instance.mps"):
        path = tmp_path / name
        with get_opener(str(path))(str(path), "wt") as f:
            f.write(content)
        return str(path)

    return _write
