from rsa_manager.core.inventory import list_key_pairs
from rsa_manager.core.keystore import KeyStore
from rsa_manager.core.store import HostConfigFile


def _make_pair(store, host_id):
    store.private_key_path(host_id).write_text('PRIVATEKEY', encoding='utf-8')
    store.public_key_path(host_id).write_text('ssh-rsa AAAA test\n', encoding='utf-8')


def test_key_paths(tmp_path):
    store = KeyStore(tmp_path)
    assert store.private_key_path('db1') == tmp_path / 'db1.key'
    assert store.public_key_path('db1') == tmp_path / 'db1.key.pub'


def test_list_ids_only_private_keys(tmp_path):
    store = KeyStore(tmp_path)
    _make_pair(store, 'web1')
    _make_pair(store, 'db1')
    (tmp_path / 'id_ed25519').write_text('x')
    (tmp_path / 'config').write_text('')
    (tmp_path / 'dir.key').mkdir()
    assert store.list_ids() == ['db1', 'web1']


def test_list_ids_missing_directory(tmp_path):
    assert KeyStore(tmp_path / 'nope').list_ids() == []


def test_delete_both_and_partial(tmp_path):
    store = KeyStore(tmp_path)
    _make_pair(store, 'web1')
    store.delete('web1')
    assert not store.private_key_path('web1').exists()
    assert not store.public_key_path('web1').exists()

    store.public_key_path('half').write_text('pub')
    store.delete('half')
    assert not store.public_key_path('half').exists()
    store.delete('never-existed')


def test_exists_and_public_key(tmp_path):
    store = KeyStore(tmp_path)
    assert not store.exists('web1')
    _make_pair(store, 'web1')
    assert store.exists('web1')
    assert store.read_public_key('web1') == 'ssh-rsa AAAA test'


def test_secure_sets_permissions(tmp_path):
    store = KeyStore(tmp_path)
    _make_pair(store, 'web1')
    store.private_key_path('web1').chmod(0o644)
    store.secure('web1')
    assert store.private_key_path('web1').stat().st_mode & 0o777 == 0o600
    assert store.public_key_path('web1').stat().st_mode & 0o777 == 0o644


def test_ensure_exists_creates_private_dir(tmp_path):
    store = KeyStore(tmp_path / '.ssh')
    assert store.ensure_exists()
    assert store.directory.stat().st_mode & 0o777 == 0o700
    assert not store.ensure_exists()


def test_inventory_matches_config(tmp_path):
    store = KeyStore(tmp_path)
    cfg = HostConfigFile(tmp_path / 'config')
    cfg.ensure_exists()
    _make_pair(store, 'db1')
    cfg.upsert_block('db1', '10.0.0.5', 'admin', str(store.private_key_path('db1')))

    records = list_key_pairs(store, cfg)
    assert len(records) == 1
    rec = records[0]
    assert rec.id == 'db1'
    assert rec.private_key_path == tmp_path / 'db1.key'
    assert rec.public_key_path == tmp_path / 'db1.key.pub'
    assert rec.has_matching_config is True


def test_inventory_reports_missing_config(tmp_path):
    store = KeyStore(tmp_path)
    cfg = HostConfigFile(tmp_path / 'config')
    _make_pair(store, 'orphan')
    records = list_key_pairs(store, cfg)
    assert [(r.id, r.has_matching_config) for r in records] == [('orphan', False)]
