"""Tests for HostKeyVerifier."""

from pathlib import Path

import pytest

from ssh_job.config.host_keys import HostKeyVerifier


def test_explicit_none_disables() -> None:
    """'none' disables verification."""
    verifier = HostKeyVerifier(known_hosts_path="none")

    assert verifier.get_known_hosts_path() is None
    assert not verifier.is_enabled()


def test_existing_custom_path(tmp_path: Path) -> None:
    """An existing file is used as-is."""
    known_hosts = tmp_path / "known_hosts"
    known_hosts.touch()

    verifier = HostKeyVerifier(known_hosts_path=str(known_hosts))

    assert verifier.get_known_hosts_path() == str(known_hosts)
    assert verifier.is_enabled()


def test_missing_path_strict_raises(tmp_path: Path) -> None:
    """Strict mode fails closed when the file is missing."""
    with pytest.raises(FileNotFoundError, match="SSH_JOB_KNOWN_HOSTS"):
        HostKeyVerifier(known_hosts_path=str(tmp_path / "missing"), strict_checking=True)


def test_missing_path_non_strict_disables(tmp_path: Path) -> None:
    """Non-strict mode disables verification when the file is missing."""
    verifier = HostKeyVerifier(
        known_hosts_path=str(tmp_path / "missing"), strict_checking=False
    )

    assert verifier.get_known_hosts_path() is None


def test_default_location(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without a path, ~/.ssh/known_hosts is used."""
    ssh_dir = tmp_path / ".ssh"
    ssh_dir.mkdir()
    (ssh_dir / "known_hosts").touch()
    monkeypatch.setattr(Path, "home", lambda: tmp_path)

    verifier = HostKeyVerifier()

    assert verifier.get_known_hosts_path() == str(ssh_dir / "known_hosts")
