import subprocess

import pytest

from rsa_manager.core import keygen
from rsa_manager.core.errors import GenerationFailure, IOFailure
from rsa_manager.core.keygen import SshKeygen
from rsa_manager.core.keystore import KeyStore


def _fake_run(write_priv=True, write_pub=True, exc=None, seen=None):
    def run(cmd, **kwargs):
        if seen is not None:
            seen.append((cmd, kwargs))
        priv = cmd[cmd.index('-f') + 1]
        if write_priv:
            with open(priv, 'w') as fh:
                fh.write('PRIVATEKEY')
        if write_pub:
            with open(priv + '.pub', 'w') as fh:
                fh.write('ssh-rsa AAAA admin@db\n')
        if exc is not None:
            raise exc
        return subprocess.CompletedProcess(cmd, 0)
    return run


def test_generate_runs_ssh_keygen(tmp_path, monkeypatch):
    seen = []
    monkeypatch.setattr(keygen.subprocess, 'run', _fake_run(seen=seen))
    store = KeyStore(tmp_path)
    paths = SshKeygen(store, timeout=30).generate('db1', 2048, 'admin@10.0.0.5')

    assert paths.private_key_path == tmp_path / 'db1.key'
    assert paths.public_key_path == tmp_path / 'db1.key.pub'
    cmd, kwargs = seen[0]
    assert cmd == [
        'ssh-keygen', '-t', 'rsa', '-b', '2048',
        '-f', str(tmp_path / 'db1.key'), '-N', '', '-C', 'admin@10.0.0.5',
    ]
    assert kwargs['check'] is True
    assert kwargs['timeout'] == 30
    assert paths.private_key_path.stat().st_mode & 0o777 == 0o600
    assert paths.public_key_path.stat().st_mode & 0o777 == 0o644


@pytest.mark.parametrize('exc', [
    subprocess.CalledProcessError(1, 'ssh-keygen'),
    subprocess.TimeoutExpired('ssh-keygen', 1),
])
def test_failure_discards_partial_artifacts(tmp_path, monkeypatch, exc):
    monkeypatch.setattr(keygen.subprocess, 'run', _fake_run(write_pub=False, exc=exc))
    store = KeyStore(tmp_path)
    with pytest.raises(GenerationFailure):
        SshKeygen(store).generate('db1', 2048, 'c')
    assert list(tmp_path.iterdir()) == []


def test_missing_public_key_is_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(keygen.subprocess, 'run', _fake_run(write_pub=False))
    store = KeyStore(tmp_path)
    with pytest.raises(GenerationFailure):
        SshKeygen(store).generate('db1', 2048, 'c')
    assert not store.exists('db1')


def test_missing_executable(tmp_path):
    store = KeyStore(tmp_path)
    gen = SshKeygen(store, executable=str(tmp_path / 'no-such-ssh-keygen'))
    with pytest.raises(GenerationFailure) as info:
        gen.generate('db1', 2048, 'c')
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_failed_cleanup_is_reported(tmp_path, monkeypatch):
    monkeypatch.setattr(keygen.subprocess, 'run', _fake_run(exc=subprocess.CalledProcessError(1, 'ssh-keygen')))

    def cannot_delete(self, host_id):
        raise IOFailure('Cannot delete db1.key: read-only file system')

    monkeypatch.setattr(KeyStore, 'delete', cannot_delete)
    with pytest.raises(GenerationFailure) as info:
        SshKeygen(KeyStore(tmp_path)).generate('db1', 2048, 'c')
    message = str(info.value)
    assert 'exited with status 1' in message
    assert 'partial key files may remain' in message
    assert 'read-only file system' in message
