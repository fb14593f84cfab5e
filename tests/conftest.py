from pathlib import Path

import pytest

from path_authz import PolicyEngine, parse_policy

SAMPLE_POLICY = """\
[groups]
devs = alice, bob

[/]
* = r

[/trunk]
@devs = rw

[repo:/trunk/private]
* =
alice = r
"""


@pytest.fixture
def policy_file(tmp_path) -> Path:
    path = tmp_path / "authz"
    path.write_text(SAMPLE_POLICY)
    return path


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch):
    """Keep PATH_AUTHZ_* variables from the environment out of the tests."""
    for name in ("PATH_AUTHZ_ACCESS_FILE", "PATH_AUTHZ_AUTHORITATIVE", "PATH_AUTHZ_ANONYMOUS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_engine() -> PolicyEngine:
    return PolicyEngine(parse_policy(SAMPLE_POLICY))
