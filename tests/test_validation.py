import pytest

from rsa_manager.core.errors import ValidationError
from rsa_manager.core.util import DEFAULT_KEY_SIZE, parse_key_size, require, validate_host_id


def test_require():
    assert require('  admin ', 'username') == 'admin'
    with pytest.raises(ValidationError):
        require('   ', 'username')
    with pytest.raises(ValidationError):
        require(None, 'username')


def test_validate_host_id_accepts_alias_chars():
    assert validate_host_id('web-1.prod_eu') == 'web-1.prod_eu'


@pytest.mark.parametrize('bad', ['', 'two words', '../etc', 'a/b', '.hidden', '-flag', 'web*'])
def test_validate_host_id_rejects(bad):
    with pytest.raises(ValidationError):
        validate_host_id(bad)


def test_parse_key_size():
    assert parse_key_size('') == DEFAULT_KEY_SIZE
    assert parse_key_size(None) == 4096
    assert parse_key_size(' 2048 ') == 2048
    assert parse_key_size('1024') == 1024


@pytest.mark.parametrize('bad', ['1023', '512', 'big', '-4096', '20.48', '²'])
def test_parse_key_size_rejects(bad):
    with pytest.raises(ValidationError):
        parse_key_size(bad)
